# graph_watcher/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Command line front end and file watcher for code_connect.

Scans a workspace, builds its dependency graph and writes it out; in watch
mode it keeps polling and rebuilds after every batch of changes.

Usage:
    python -m graph_watcher ~/projects/webapp --watch

Components:
    - GraphConfig: Configuration model for YAML files
    - WatchSettings: Polling and debounce settings
    - GraphWatcher: Polling loop with debounced full rebuilds
"""

from .config import GraphConfig, WatchSettings
from .watcher import FileChange, GraphWatcher, WatcherStats, diff_snapshots

__all__ = [
    # Config
    "GraphConfig",
    "WatchSettings",
    # Watcher
    "GraphWatcher",
    "WatcherStats",
    "FileChange",
    "diff_snapshots",
]
