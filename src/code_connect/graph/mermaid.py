# code_connect/graph/mermaid.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Mermaid diagram generation from a graph payload.

Produces graph TD format diagrams for quick visual inspection in Markdown
viewers.
"""

from .models import GraphData, GraphNode

# Node shapes per kind: folder as a subroutine box, file as a rectangle,
# function as a rounded box.
_SHAPES = {
    "folder": ('[["', '"]]'),
    "file": ('["', '"]'),
    "function": ('("', '")'),
}

_ARROWS = {
    "contains": "-->",
    "imports": "-.->",
    "calls": "==>",
}


def generate_mermaid(graph: GraphData, max_edges: int = 200) -> str:
    """Generate mermaid diagram from a graph.

    Args:
        graph: Graph payload (usually the full build or a filtered view)
        max_edges: Limit to prevent huge diagrams

    Returns:
        Mermaid graph definition string suitable for rendering.
    """
    lines = ["graph TD"]
    nodes_by_id = {node.id: node for node in graph.nodes}

    edge_list = list(graph.edges)[:max_edges]
    shown: set[str] = set()
    for edge in edge_list:
        shown.add(edge.source)
        shown.add(edge.target)

    # Declare nodes first so edge lines stay short
    for node in graph.nodes:
        if node.id in shown or not graph.edges:
            lines.append(f"    {_sanitize_id(node.id)}{_shape(node)}")

    for edge in edge_list:
        if edge.source not in nodes_by_id or edge.target not in nodes_by_id:
            continue
        arrow = _ARROWS.get(edge.type, "-->")
        label = f"|{_escape(edge.label)}|" if edge.label else ""
        lines.append(
            f"    {_sanitize_id(edge.source)} {arrow}{label} {_sanitize_id(edge.target)}"
        )

    if len(graph.edges) > max_edges:
        lines.append(f'    note["... and {len(graph.edges) - max_edges} more edges"]')

    return "\n".join(lines)


def _shape(node: GraphNode) -> str:
    left, right = _SHAPES.get(node.type, ('["', '"]'))
    display = node.label
    if node.type == "function":
        display = f"{node.label}:{node.line}"
    return f"{left}{_escape(display)}{right}"


def _escape(text: str) -> str:
    """Escape characters mermaid treats as syntax inside labels."""
    return text.replace('"', "#quot;").replace("|", "#124;")


def _sanitize_id(s: str) -> str:
    """Sanitize string for mermaid node ID.

    Replaces characters that are invalid in mermaid IDs.

    Args:
        s: Raw string to sanitize

    Returns:
        Sanitized string safe for use as mermaid node ID.
    """
    return s.replace("/", "_").replace(".", "_").replace("-", "_").replace(":", "_")
