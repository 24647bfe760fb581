# graph_watcher/__main__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Module entry point for code-connect.

Allows running with: python -m graph_watcher ~/projects/webapp
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
