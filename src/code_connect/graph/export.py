# code_connect/graph/export.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Graph payload persistence and renderer formats.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .models import GraphData

logger = logging.getLogger(__name__)

GRAPH_FILENAME = "graph.json"


def to_elements(graph: GraphData) -> list[dict[str, Any]]:
    """Convert a graph into renderer elements.

    Produces the [{"data": {...}}, ...] list that Cytoscape-style renderers
    consume: all nodes first, then all edges.

    Args:
        graph: Graph payload

    Returns:
        List of element dicts.
    """
    elements = [{"data": node.to_dict()} for node in graph.nodes]
    elements.extend({"data": edge.to_dict()} for edge in graph.edges)
    return elements


def save_graph(graph: GraphData, path: Path) -> Path:
    """Write the graph payload as JSON.

    Args:
        graph: Graph to save.
        path: Target file, or a directory to write graph.json into.

    Returns:
        The file written.
    """
    path = Path(path)
    if path.is_dir():
        path = path / GRAPH_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(graph.to_dict(), f, indent=2)

    logger.debug(f"Saved graph to {path}")
    return path


def load_graph(path: Path) -> GraphData:
    """Load a graph payload written by save_graph().

    Args:
        path: File, or directory containing graph.json.

    Returns:
        GraphData populated from file, or an empty graph if the file is missing.
    """
    path = Path(path)
    if path.is_dir():
        path = path / GRAPH_FILENAME

    if not path.exists():
        return GraphData.empty()

    with open(path) as f:
        data = json.load(f)

    return GraphData.from_dict(data)
