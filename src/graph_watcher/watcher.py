# graph_watcher/watcher.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Polling watcher that rebuilds the graph when source files change.

The watcher only decides when to rebuild. Each rebuild re-parses the changed
files and then builds the whole graph from scratch.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Literal, Optional

from code_connect.graph import GraphBuilder, GraphData
from code_connect.scanner import Scanner

logger = logging.getLogger(__name__)


ChangeType = Literal["created", "modified", "deleted"]


@dataclass(frozen=True)
class FileChange:
    """A single detected change."""

    path: str
    change_type: ChangeType


@dataclass
class WatcherStats:
    """Statistics for the watcher."""

    started_at: datetime = field(default_factory=datetime.now)
    cycles: int = 0
    changes_seen: int = 0
    rebuilds: int = 0
    errors: int = 0
    last_rebuild: Optional[datetime] = None


def diff_snapshots(
    before: dict[str, float], after: dict[str, float]
) -> list[FileChange]:
    """Compare two {path: mtime} snapshots.

    Returns:
        Changes sorted by path: created, modified (mtime differs) and deleted.
    """
    changes = []
    for path in sorted(set(before) | set(after)):
        if path not in before:
            changes.append(FileChange(path, "created"))
        elif path not in after:
            changes.append(FileChange(path, "deleted"))
        elif before[path] != after[path]:
            changes.append(FileChange(path, "modified"))
    return changes


class GraphWatcher:
    """
    Watches a workspace and keeps its graph current.

    Runs a polling loop that:
    1. Snapshots the mtimes of every included file
    2. Collects created/modified/deleted files into a pending set
    3. Once no new change has arrived for debounce_seconds, re-parses the
       pending files and rebuilds the graph
    """

    def __init__(
        self,
        scanner: Scanner,
        builder: GraphBuilder,
        poll_interval: float = 2.0,
        debounce_seconds: float = 1.0,
        on_rebuild: Optional[Callable[[GraphData], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            scanner: Scanner holding the current records for the workspace
            builder: Builder used for every rebuild
            poll_interval: Seconds between polling cycles
            debounce_seconds: Quiet period required before a rebuild
            on_rebuild: Called with each new graph
            clock: Monotonic time source
        """
        self.scanner = scanner
        self.builder = builder
        self.poll_interval = poll_interval
        self.debounce_seconds = debounce_seconds
        self.on_rebuild = on_rebuild
        self.clock = clock

        self.stats = WatcherStats()
        self.graph: GraphData = builder.last_graph
        self._running = False
        self._snapshot: Optional[dict[str, float]] = None
        self._pending: dict[str, FileChange] = {}
        self._last_change: Optional[float] = None
        self._build_lock = asyncio.Lock()

    def take_snapshot(self) -> dict[str, float]:
        """Current {path: mtime} for every included file."""
        snapshot = {}
        for path in self.scanner.iter_files():
            try:
                snapshot[str(path)] = Path(path).stat().st_mtime
            except OSError:
                # Deleted between listing and stat
                continue
        return snapshot

    def prime(self, snapshot: Optional[dict[str, float]] = None) -> None:
        """Set the baseline snapshot that later polls are compared to."""
        self._snapshot = snapshot if snapshot is not None else self.take_snapshot()

    @property
    def pending(self) -> list[FileChange]:
        return list(self._pending.values())

    def poll(self, current: Optional[dict[str, float]] = None) -> list[FileChange]:
        """Queue any changes since the previous snapshot.

        Args:
            current: Snapshot to compare; taken now when omitted.

        Returns:
            The changes detected by this poll.
        """
        if current is None:
            current = self.take_snapshot()
        if self._snapshot is None:
            self._snapshot = current
            return []

        changes = diff_snapshots(self._snapshot, current)
        self._snapshot = current
        if changes:
            for change in changes:
                self._pending[change.path] = change
            self._last_change = self.clock()
            self.stats.changes_seen += len(changes)
            logger.debug(f"Detected {len(changes)} changes, {len(self._pending)} pending")
        return changes

    def ready(self) -> bool:
        """True when changes are pending and the debounce window has passed."""
        if not self._pending or self._last_change is None:
            return False
        return self.clock() - self._last_change >= self.debounce_seconds

    def _apply_changes(self, changes: list[FileChange]) -> GraphData:
        for change in changes:
            if change.change_type == "deleted":
                self.scanner.remove_file(Path(change.path))
            else:
                self.scanner.scan_file(Path(change.path))
        return self.builder.build(self.scanner.get_files())

    async def rebuild(self) -> GraphData:
        """Apply the pending changes and rebuild the whole graph.

        Builds are serialized; a rebuild requested while one is running waits
        for it to finish.
        """
        async with self._build_lock:
            changes = self.pending
            self._pending.clear()
            self._last_change = None

            graph = await asyncio.to_thread(self._apply_changes, changes)
            self.graph = graph
            self.stats.rebuilds += 1
            self.stats.last_rebuild = datetime.now()
            logger.info(
                f"Rebuilt graph after {len(changes)} changes: "
                f"{graph.stats.total_nodes} nodes, {graph.stats.total_edges} edges"
            )

            if self.on_rebuild:
                self.on_rebuild(graph)
            return graph

    async def run_cycle(self) -> bool:
        """
        Run a single polling cycle.

        Returns:
            True if the graph was rebuilt
        """
        self.stats.cycles += 1
        # Walking the workspace can take a while, keep it off the event loop
        snapshot = await asyncio.to_thread(self.take_snapshot)
        self.poll(snapshot)
        if self.ready():
            await self.rebuild()
            return True
        return False

    async def run(self) -> None:
        """
        Run the watcher loop until stop() is called.
        """
        self._running = True
        if self._snapshot is None:
            self.prime()
        logger.info(
            f"Watching {self.scanner.workspace_root}, polling every {self.poll_interval}s"
        )

        while self._running:
            try:
                await self.run_cycle()
            except Exception as e:
                logger.error(f"Error in watcher cycle: {e}")
                self.stats.errors += 1

            await asyncio.sleep(self.poll_interval)

        logger.info("Watcher stopped")

    def stop(self) -> None:
        """Signal the watcher to stop."""
        self._running = False
