# tests/unit/code_connect/graph/test_mermaid.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Tests for mermaid diagram generation."""

from code_connect.graph import GraphBuilder, GraphData, filter_graph, generate_mermaid
from code_connect.graph.mermaid import _sanitize_id


class TestGenerateMermaid:
    """Tests for generate_mermaid."""

    def test_header(self):
        assert generate_mermaid(GraphData.empty()) == "graph TD"

    def test_node_shapes(self, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        diagram = generate_mermaid(graph)

        assert 'folder_0[["src"]]' in diagram
        assert 'file_1["a.js"]' in diagram
        assert 'function_2("foo:0")' in diagram

    def test_edge_styles(self, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        diagram = generate_mermaid(graph)

        assert "folder_0 --> file_1" in diagram
        assert "file_1 -.->|bar| file_3" in diagram

    def test_call_edges_are_thick(self, workspace):
        files = {
            "/ws/a.js": {
                "path": "/ws/a.js",
                "functions": [
                    {"name": "main", "line": 0, "endLine": 3},
                    {"name": "helper", "line": 5, "endLine": 6},
                ],
                "calls": [{"name": "helper", "line": 1}],
            }
        }
        graph = GraphBuilder(workspace).build(files)
        assert "function_1 ==> function_2" in generate_mermaid(graph)

    def test_truncation_note(self, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        diagram = generate_mermaid(graph, max_edges=2)

        assert diagram.count("-->") + diagram.count("-.->") == 2
        assert "... and 3 more edges" in diagram

    def test_nodes_without_edges_are_listed(self, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        view = filter_graph(graph, ["function"])
        diagram = generate_mermaid(view)

        assert 'function_2("foo:0")' in diagram
        assert 'function_4("bar:0")' in diagram

    def test_labels_are_escaped(self, workspace):
        files = {
            "/ws/a.js": {
                "path": "/ws/a.js",
                "imports": [{"source": "/ws/b", "imported": 'x"y|z'}],
            },
            "/ws/b.js": {"path": "/ws/b.js"},
        }
        graph = GraphBuilder(workspace).build(files)
        diagram = generate_mermaid(graph)

        assert "|x#quot;y#124;z|" in diagram


class TestSanitizeId:
    """Tests for _sanitize_id."""

    def test_replaces_syntax_characters(self):
        assert _sanitize_id("file-1") == "file_1"
        assert _sanitize_id("a/b.c:d") == "a_b_c_d"
