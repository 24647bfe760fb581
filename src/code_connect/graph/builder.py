# code_connect/graph/builder.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Graph construction from File Records.

Builds a folder -> file -> function hierarchy with "contains" edges, then
links files through resolved imports and functions through same-file calls.

Passes:
- Folders: every directory between the workspace root and a scanned file
- Files and functions: one node each, attached to their parent
- Imports: file -> file edges via the ImportResolver chain
- Calls: function -> function edges via FunctionScopes
"""

import logging
import os
from typing import Any, Iterable, Mapping, Optional, Sequence

from code_connect.records import FileRecord

from .call_resolver import FunctionScopes
from .import_resolver import ImportResolver, ImportStrategy
from .models import (
    NODE_KINDS,
    FileNode,
    FolderNode,
    FunctionNode,
    GraphData,
)
from .store import GraphStore

logger = logging.getLogger(__name__)


def _to_posix(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def filter_graph(graph: GraphData, types: Iterable[str]) -> GraphData:
    """Subgraph induced by the given node types.

    Keeps nodes whose type is listed and only the edges whose both endpoints
    survive. Stats are recomputed for the result. Unknown type names are
    ignored.

    Args:
        graph: Full graph payload
        types: Node types to keep, e.g. ["file"] for a file-level import view

    Returns:
        New GraphData; the input is not modified.
    """
    allowed = {kind for kind in types if kind in NODE_KINDS}
    nodes = [node for node in graph.nodes if node.type in allowed]
    node_ids = {node.id for node in nodes}
    edges = [
        edge
        for edge in graph.edges
        if edge.source in node_ids and edge.target in node_ids
    ]
    return GraphData.create(nodes, edges)


class GraphBuilder:
    """Builds dependency graphs from File Records.

    Each build() call works on a fresh GraphStore, so builds never leak
    state into one another and identical input yields identical ids. A
    builder instance is not meant to run two builds at once; callers that
    rebuild from several threads should serialize their calls.
    """

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        resolver_strategies: Optional[Sequence[ImportStrategy]] = None,
    ):
        """Initialize builder.

        Args:
            workspace_root: Absolute path of the scanned root. Folder nodes are
                            created for directories below it; with None, no
                            folder nodes are created.
            resolver_strategies: Import resolution chain; the default chain
                                 (exact, extension, index, fuzzy) when None.
        """
        self.workspace_root = (
            os.path.normpath(str(workspace_root)) if workspace_root else None
        )
        self.resolver_strategies = resolver_strategies
        self.last_graph: GraphData = GraphData.empty()
        self._store = GraphStore()

    def build(self, files: Mapping[str, Any]) -> GraphData:
        """Build the full graph for a snapshot of file records.

        Args:
            files: Map of absolute file path -> FileRecord (or a dict in the
                   File Record shape). Iteration order decides tie-breaks:
                   which duplicate edge label is kept and which file the
                   fuzzy import stage finds first.

        Returns:
            Immutable GraphData. An empty map yields an empty graph. Bad
            records degrade that file's contribution; nothing is raised.
        """
        self._store = GraphStore()

        records = self._coerce_records(files)
        if not records:
            self.last_graph = self._store.snapshot()
            return self.last_graph

        self._build_folder_nodes(records)
        self._build_file_nodes(records)
        self._build_edges(records)

        self.last_graph = self._store.snapshot()
        logger.debug(
            f"Built graph: {self.last_graph.stats.total_nodes} nodes, "
            f"{self.last_graph.stats.total_edges} edges from {len(records)} files"
        )
        return self.last_graph

    def _coerce_records(self, files: Mapping[str, Any]) -> list[FileRecord]:
        records = []
        for path, raw in files.items():
            try:
                records.append(FileRecord.coerce(path, raw))
            except Exception as e:
                logger.warning(f"Skipping record for {path}: {e}")
        return records

    def filter_by_node_type(self, types: Iterable[str]) -> GraphData:
        """Filter the most recent build to the given node types."""
        return filter_graph(self.last_graph, types)

    def _relative_path(self, path: str) -> str:
        if not self.workspace_root:
            return path
        try:
            rel = os.path.relpath(path, self.workspace_root)
        except ValueError:
            # Different drive on Windows
            return path
        return _to_posix(rel) if rel != os.curdir else "."

    def _folder_ancestry(self, file_path: str) -> list[str]:
        """Directories from the file's parent up to (not including) the root.

        Stops at the workspace root, or at a filesystem root (a path that is
        its own parent) for files outside the workspace.
        """
        folders = []
        current = os.path.dirname(file_path)
        while current != self.workspace_root and current != os.path.dirname(current):
            folders.append(current)
            current = os.path.dirname(current)
        return folders

    def _build_folder_nodes(self, records: list[FileRecord]) -> None:
        if not self.workspace_root:
            return

        folders: dict[str, None] = {}
        for record in records:
            try:
                for folder in self._folder_ancestry(record.path):
                    folders.setdefault(folder, None)
            except Exception as e:
                logger.warning(f"Skipping folders for {record.path}: {e}")

        for folder_path in folders:
            self._store.add_node(
                FolderNode(
                    id=self._store.node_id("folder", folder_path),
                    label=os.path.basename(folder_path),
                    path=folder_path,
                    relative_path=self._relative_path(folder_path),
                )
            )

    def _function_key(self, record: FileRecord, func) -> tuple:
        return (record.path, func.name, func.line)

    def _build_file_nodes(self, records: list[FileRecord]) -> None:
        for record in records:
            try:
                self._add_file(record)
            except Exception as e:
                logger.warning(f"Skipping nodes for {record.path}: {e}")

    def _add_file(self, record: FileRecord) -> None:
        file_id = self._store.add_node(
            FileNode(
                id=self._store.node_id("file", record.path),
                label=os.path.basename(record.path),
                path=record.path,
                relative_path=self._relative_path(record.path),
                language=record.language,
                function_count=len(record.functions),
                import_count=len(record.imports),
                export_count=len(record.exports),
            )
        )

        # Files directly under the root have no folder node to hang from
        parent = os.path.dirname(record.path)
        if self._store.has_node("folder", parent):
            self._store.add_edge(
                self._store.node_id("folder", parent), file_id, "contains"
            )

        for func in record.functions:
            key = self._function_key(record, func)
            func_id = self._store.add_node(
                FunctionNode(
                    id=self._store.node_id("function", key),
                    label=func.name,
                    path=record.path,
                    line=func.line,
                    end_line=func.end_line,
                    function_type=func.type,
                    params=tuple(func.params),
                )
            )
            self._store.add_edge(file_id, func_id, "contains")

    def _build_edges(self, records: list[FileRecord]) -> None:
        resolver = ImportResolver(
            [record.path for record in records], self.resolver_strategies
        )
        for record in records:
            try:
                self._add_import_edges(record, resolver)
            except Exception as e:
                logger.warning(f"Skipping imports for {record.path}: {e}")
            try:
                self._add_call_edges(record)
            except Exception as e:
                logger.warning(f"Skipping calls for {record.path}: {e}")

    def _add_import_edges(self, record: FileRecord, resolver: ImportResolver) -> None:
        if not self._store.has_node("file", record.path):
            return
        file_id = self._store.node_id("file", record.path)
        for imp in record.imports:
            try:
                target_path = resolver.resolve(imp.source)
            except Exception as e:
                logger.warning(f"Could not resolve {imp.source!r} in {record.path}: {e}")
                continue
            if target_path is None or not self._store.has_node("file", target_path):
                continue

            self._store.add_edge(
                file_id,
                self._store.node_id("file", target_path),
                "imports",
                label=imp.imported if imp.imported != "*" else "",
            )

    def _add_call_edges(self, record: FileRecord) -> None:
        if not record.functions or not record.calls:
            return
        if not self._store.has_node("file", record.path):
            return

        scopes = FunctionScopes.from_functions(
            (func, self._store.node_id("function", self._function_key(record, func)))
            for func in record.functions
        )
        for call in record.calls:
            resolved = scopes.resolve_call(call.name, call.line)
            if resolved is None:
                continue
            caller, callee = resolved
            self._store.add_edge(caller.node_id, callee.node_id, "calls")
