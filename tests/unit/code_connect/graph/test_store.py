# tests/unit/code_connect/graph/test_store.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Tests for GraphStore - node/edge accumulation with dedup."""

from code_connect.graph import FileNode, FolderNode, GraphStore


def _file_node(store, path):
    return FileNode(
        id=store.node_id("file", path),
        label=path.rsplit("/", 1)[-1],
        path=path,
        relative_path=path,
    )


class TestNodes:
    """Tests for add_node and has_node."""

    def test_add_node_is_idempotent(self):
        store = GraphStore()
        first = store.add_node(_file_node(store, "/ws/a.js"))
        second = store.add_node(_file_node(store, "/ws/a.js"))

        assert first == second
        assert len(store.nodes) == 1

    def test_duplicate_with_other_id_keeps_existing(self):
        """A node carrying a stray id is absorbed by the first one with its key."""
        store = GraphStore()
        first = store.add_node(_file_node(store, "/ws/a.js"))
        stray = FileNode(id="file-99", label="a.js", path="/ws/a.js", relative_path="a.js")

        assert store.add_node(stray) == first
        assert [n.id for n in store.nodes] == [first]

    def test_has_node_checks_kind(self):
        store = GraphStore()
        store.add_node(_file_node(store, "/ws/src"))

        assert store.has_node("file", "/ws/src")
        assert not store.has_node("folder", "/ws/src")

    def test_node_id_alone_does_not_add(self):
        store = GraphStore()
        store.node_id("folder", "/ws/src")

        assert not store.has_node("folder", "/ws/src")
        assert store.nodes == []

    def test_function_key_lookup(self):
        store = GraphStore()
        assert not store.has_node("function", ("/ws/a.js", "foo", 0))


class TestEdges:
    """Tests for add_edge."""

    def test_duplicate_triple_is_dropped(self):
        store = GraphStore()
        first = store.add_edge("file-0", "file-1", "imports", label="foo")
        second = store.add_edge("file-0", "file-1", "imports", label="bar")

        assert first is not None
        assert second is None
        assert [e.label for e in store.edges] == ["foo"]

    def test_type_is_part_of_the_triple(self):
        store = GraphStore()
        store.add_edge("function-1", "function-2", "calls")
        store.add_edge("function-1", "function-2", "contains")

        assert len(store.edges) == 2

    def test_direction_matters(self):
        store = GraphStore()
        store.add_edge("a", "b", "calls")
        store.add_edge("b", "a", "calls")

        assert len(store.edges) == 2

    def test_edge_ids_are_sequential(self):
        store = GraphStore()
        store.add_edge("a", "b", "calls")
        store.add_edge("a", "b", "calls")
        store.add_edge("a", "c", "calls")

        assert [e.id for e in store.edges] == ["edge-0", "edge-1"]

    def test_none_label_becomes_empty(self):
        store = GraphStore()
        edge = store.add_edge("a", "b", "imports", label=None)
        assert edge.label == ""


class TestResetAndSnapshot:
    """Tests for reset and snapshot."""

    def test_reset_clears_everything(self):
        store = GraphStore()
        folder = FolderNode(
            id=store.node_id("folder", "/ws/src"), label="src", path="/ws/src", relative_path="src"
        )
        store.add_node(folder)
        store.add_edge("folder-0", "file-1", "contains")

        store.reset()

        assert store.nodes == []
        assert store.edges == []
        assert len(store.identities) == 0
        assert store.node_id("file", "/ws/a.js") == "file-0"

    def test_snapshot_is_detached(self):
        store = GraphStore()
        store.add_node(_file_node(store, "/ws/a.js"))
        snapshot = store.snapshot()

        store.add_node(_file_node(store, "/ws/b.js"))

        assert snapshot.stats.total_nodes == 1
        assert isinstance(snapshot.nodes, tuple)
