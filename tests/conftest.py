# tests/conftest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pytest configuration for code-connect tests.

Ensures the src packages (code_connect, graph_watcher) are importable and
provides sample File Records shared by the graph tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for local packages
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


WORKSPACE = "/ws"


@pytest.fixture
def workspace() -> str:
    """Absolute workspace root used by the in-memory records."""
    return WORKSPACE


@pytest.fixture
def two_file_records() -> dict:
    """src/a.js defines foo (calls bar, imports bar from ./b); src/b.js defines bar."""
    return {
        "/ws/src/a.js": {
            "path": "/ws/src/a.js",
            "language": "javascript",
            "functions": [
                {"name": "foo", "type": "function", "line": 0, "endLine": 2, "params": []},
            ],
            "imports": [
                {"source": "/ws/src/b", "imported": "bar", "local": "bar", "line": 0},
            ],
            "exports": [],
            "calls": [{"name": "bar", "line": 1}],
        },
        "/ws/src/b.js": {
            "path": "/ws/src/b.js",
            "language": "javascript",
            "functions": [
                {"name": "bar", "type": "function", "line": 0, "endLine": 1, "params": ["x"]},
            ],
            "imports": [],
            "exports": [{"name": "bar", "type": "function", "line": 0}],
            "calls": [],
        },
    }
