# code_connect/graph/store.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Node and edge accumulation for a single graph build.

GraphStore owns the identity registry plus the ordered node and edge lists,
and enforces the two dedup invariants: one node per canonical key, one edge
per (source, target, type).
"""

from typing import Optional

from .identity import IdentityRegistry
from .models import GraphData, GraphEdge, GraphNode


class GraphStore:
    """Accumulates nodes and edges while a graph is being built.

    Insertion order is preserved and is the order of the final payload.
    Duplicate inserts are absorbed, never raised: a repeated node returns the
    id of the first one, a repeated edge is dropped (the first label wins).
    """

    def __init__(self):
        """Initialize empty store."""
        self.identities = IdentityRegistry()
        self._nodes: list[GraphNode] = []
        self._node_ids: dict[tuple, str] = {}
        self._edges: list[GraphEdge] = []
        self._edge_keys: set[tuple[str, str, str]] = set()

    def node_id(self, kind: str, key) -> str:
        """Id for (kind, key), assigned now if this is the first request."""
        return self.identities.get_or_assign(kind, key)

    def has_node(self, kind: str, key) -> bool:
        """Check whether a node with this canonical key was added."""
        if not isinstance(key, tuple):
            key = (key,)
        return (kind, *key) in self._node_ids

    def add_node(self, node: GraphNode) -> str:
        """Add a node unless its canonical key is already present.

        Args:
            node: Node to insert.

        Returns:
            Id of the stored node (the existing one for duplicates).
        """
        existing = self._node_ids.get(node.key)
        if existing is not None:
            return existing

        self._nodes.append(node)
        self._node_ids[node.key] = node.id
        return node.id

    def add_edge(
        self, source: str, target: str, kind: str, label: str = ""
    ) -> Optional[GraphEdge]:
        """Add an edge unless (source, target, kind) already exists.

        Args:
            source: Source node id
            target: Target node id
            kind: Edge type ("contains", "imports", "calls")
            label: Display label, kept only from the first occurrence

        Returns:
            The new edge, or None when it was a duplicate.
        """
        edge_key = (source, target, kind)
        if edge_key in self._edge_keys:
            return None

        edge = GraphEdge(
            id=f"edge-{len(self._edges)}",
            source=source,
            target=target,
            type=kind,
            label=label or "",
        )
        self._edges.append(edge)
        self._edge_keys.add(edge_key)
        return edge

    @property
    def nodes(self) -> list[GraphNode]:
        return list(self._nodes)

    @property
    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    def reset(self) -> None:
        """Drop all nodes, edges and identity mappings."""
        self.identities.reset()
        self._nodes.clear()
        self._node_ids.clear()
        self._edges.clear()
        self._edge_keys.clear()

    def snapshot(self) -> GraphData:
        """Freeze the current contents into a GraphData payload."""
        return GraphData.create(self._nodes, self._edges)
