# code_connect/graph/__init__.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Dependency graph module.

Turns per-file extraction results into a deduplicated folder/file/function
graph with import and call edges.

Components:
- GraphBuilder: Orchestrates a build and returns an immutable GraphData
- GraphStore: Node/edge accumulation with dedup for one build
- IdentityRegistry: One stable id per (kind, canonical key)
- ImportResolver: Ordered import resolution strategies
- FunctionScopes: Line-interval call attribution within a file
- generate_mermaid / to_elements / save_graph: Output formats
"""

from .models import (
    EDGE_KINDS,
    NODE_KINDS,
    FileNode,
    FolderNode,
    FunctionNode,
    GraphData,
    GraphEdge,
    GraphNode,
    GraphStats,
)
from .identity import IdentityRegistry
from .store import GraphStore
from .import_resolver import (
    ExactPathStrategy,
    ExtensionStrategy,
    FuzzyPathStrategy,
    ImportResolver,
    ImportStrategy,
    IndexFileStrategy,
    default_strategies,
)
from .call_resolver import FunctionScope, FunctionScopes
from .builder import GraphBuilder, filter_graph
from .export import load_graph, save_graph, to_elements
from .mermaid import generate_mermaid

__all__ = [
    # Core types
    "NODE_KINDS",
    "EDGE_KINDS",
    "FolderNode",
    "FileNode",
    "FunctionNode",
    "GraphNode",
    "GraphEdge",
    "GraphStats",
    "GraphData",
    # Construction
    "IdentityRegistry",
    "GraphStore",
    "GraphBuilder",
    "filter_graph",
    # Resolution
    "ImportResolver",
    "ImportStrategy",
    "ExactPathStrategy",
    "ExtensionStrategy",
    "IndexFileStrategy",
    "FuzzyPathStrategy",
    "default_strategies",
    "FunctionScope",
    "FunctionScopes",
    # Output
    "to_elements",
    "save_graph",
    "load_graph",
    "generate_mermaid",
]
