# code_connect/__init__.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
code_connect: folder/file/function dependency graphs for source trees.

This package provides:
- FileRecord: Per-file extraction contract (functions, imports, exports, calls)
- Parsers: Tree-sitter extraction for Python, TypeScript and JavaScript
- Scanner: Workspace discovery with include/exclude globs
- GraphBuilder: Deduplicated node/edge graph with resolved imports and calls
"""

from code_connect.records import (
    CallInfo,
    ExportInfo,
    FileRecord,
    FunctionInfo,
    ImportInfo,
)
from code_connect.graph import (
    GraphBuilder,
    GraphData,
    filter_graph,
    generate_mermaid,
    load_graph,
    save_graph,
    to_elements,
)
from code_connect.parsers import ParserRegistry
from code_connect.scanner import Scanner, ScanStats

__all__ = [
    # Records
    "FileRecord",
    "FunctionInfo",
    "ImportInfo",
    "ExportInfo",
    "CallInfo",
    # Graph
    "GraphBuilder",
    "GraphData",
    "filter_graph",
    "generate_mermaid",
    "to_elements",
    "save_graph",
    "load_graph",
    # Discovery
    "ParserRegistry",
    "Scanner",
    "ScanStats",
]
