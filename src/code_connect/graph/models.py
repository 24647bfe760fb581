# code_connect/graph/models.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Data models for the dependency graph.

Nodes form a closed tagged union (FolderNode | FileNode | FunctionNode), each
with the fields its kind requires. GraphData is the finished, immutable
payload handed to renderers; to_dict() produces the plain-JSON wire format
with camelCase keys.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Optional, Union

NodeKind = Literal["folder", "file", "function"]
EdgeKind = Literal["contains", "imports", "calls"]

NODE_KINDS: tuple[str, ...] = ("folder", "file", "function")
EDGE_KINDS: tuple[str, ...] = ("contains", "imports", "calls")

# Canonical key: ("folder", path) | ("file", path) | ("function", path, name, line)
NodeKey = tuple


@dataclass(frozen=True)
class FolderNode:
    """A directory between the workspace root and a scanned file."""

    id: str
    label: str
    path: str
    relative_path: str
    type: Literal["folder"] = "folder"

    @property
    def key(self) -> NodeKey:
        return ("folder", self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "path": self.path,
            "relativePath": self.relative_path,
        }


@dataclass(frozen=True)
class FileNode:
    """A scanned source file with summary counts."""

    id: str
    label: str
    path: str
    relative_path: str
    language: Optional[str] = None
    function_count: int = 0
    import_count: int = 0
    export_count: int = 0
    type: Literal["file"] = "file"

    @property
    def key(self) -> NodeKey:
        return ("file", self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "path": self.path,
            "relativePath": self.relative_path,
            "language": self.language,
            "functionCount": self.function_count,
            "importCount": self.import_count,
            "exportCount": self.export_count,
        }


@dataclass(frozen=True)
class FunctionNode:
    """A function, method or function-valued variable inside a file.

    Two functions with the same name in one file (overloads, redefinitions)
    stay distinct because the start line is part of the key.
    """

    id: str
    label: str
    path: str
    line: int
    end_line: int
    function_type: str = "function"
    params: tuple[str, ...] = ()
    type: Literal["function"] = "function"

    @property
    def key(self) -> NodeKey:
        return ("function", self.path, self.label, self.line)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "path": self.path,
            "line": self.line,
            "endLine": self.end_line,
            "functionType": self.function_type,
            "params": list(self.params),
        }


GraphNode = Union[FolderNode, FileNode, FunctionNode]


@dataclass(frozen=True)
class GraphEdge:
    """A directed relationship between two nodes."""

    id: str
    source: str
    target: str
    type: EdgeKind
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "label": self.label,
        }


@dataclass(frozen=True)
class GraphStats:
    """Aggregate counts for a graph payload."""

    total_nodes: int = 0
    total_edges: int = 0
    nodes_by_type: dict[str, int] = field(
        default_factory=lambda: {kind: 0 for kind in NODE_KINDS}
    )
    edges_by_type: dict[str, int] = field(
        default_factory=lambda: {kind: 0 for kind in EDGE_KINDS}
    )

    @classmethod
    def compute(
        cls, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]
    ) -> "GraphStats":
        """Count nodes and edges, per kind.

        Every known kind is present in the per-type maps, zero if absent.
        """
        nodes_by_type = {kind: 0 for kind in NODE_KINDS}
        edges_by_type = {kind: 0 for kind in EDGE_KINDS}
        total_nodes = 0
        total_edges = 0

        for node in nodes:
            total_nodes += 1
            if node.type in nodes_by_type:
                nodes_by_type[node.type] += 1
        for edge in edges:
            total_edges += 1
            if edge.type in edges_by_type:
                edges_by_type[edge.type] += 1

        return cls(
            total_nodes=total_nodes,
            total_edges=total_edges,
            nodes_by_type=nodes_by_type,
            edges_by_type=edges_by_type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalNodes": self.total_nodes,
            "totalEdges": self.total_edges,
            "nodesByType": dict(self.nodes_by_type),
            "edgesByType": dict(self.edges_by_type),
        }


@dataclass(frozen=True)
class GraphData:
    """Immutable graph snapshot: nodes, edges and their stats.

    Holds no references back into the builder, so it can be serialized,
    cached, or passed across threads freely.
    """

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()
    stats: GraphStats = field(default_factory=GraphStats)

    @classmethod
    def create(
        cls, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]
    ) -> "GraphData":
        """Freeze nodes and edges into a payload with freshly computed stats."""
        nodes = tuple(nodes)
        edges = tuple(edges)
        return cls(nodes=nodes, edges=edges, stats=GraphStats.compute(nodes, edges))

    @classmethod
    def empty(cls) -> "GraphData":
        return cls()

    def node_by_id(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_type(self, kind: str) -> list[GraphNode]:
        return [node for node in self.nodes if node.type == kind]

    def edges_of_type(self, kind: str) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.type == kind]

    def to_dict(self) -> dict[str, Any]:
        """Plain-JSON payload: {nodes, edges, stats}."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraphData":
        """Rebuild a payload from to_dict() output.

        Stats are recomputed rather than trusted. Entries of unknown type
        are skipped.
        """
        nodes = [
            node
            for node in (_node_from_dict(raw) for raw in data.get("nodes", []))
            if node is not None
        ]
        edges = [
            GraphEdge(
                id=raw["id"],
                source=raw["source"],
                target=raw["target"],
                type=raw["type"],
                label=raw.get("label", ""),
            )
            for raw in data.get("edges", [])
            if raw.get("type") in EDGE_KINDS
        ]
        return cls.create(nodes, edges)


def _node_from_dict(raw: dict[str, Any]) -> Optional[GraphNode]:
    kind = raw.get("type")
    if kind == "folder":
        return FolderNode(
            id=raw["id"],
            label=raw["label"],
            path=raw["path"],
            relative_path=raw.get("relativePath", "."),
        )
    if kind == "file":
        return FileNode(
            id=raw["id"],
            label=raw["label"],
            path=raw["path"],
            relative_path=raw.get("relativePath", raw["path"]),
            language=raw.get("language"),
            function_count=raw.get("functionCount", 0),
            import_count=raw.get("importCount", 0),
            export_count=raw.get("exportCount", 0),
        )
    if kind == "function":
        return FunctionNode(
            id=raw["id"],
            label=raw["label"],
            path=raw["path"],
            line=raw["line"],
            end_line=raw.get("endLine", raw["line"]),
            function_type=raw.get("functionType", "function"),
            params=tuple(raw.get("params", [])),
        )
    return None
