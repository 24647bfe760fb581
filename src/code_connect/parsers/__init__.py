# code_connect/parsers/__init__.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Language parsers.

Tree-sitter based parsers that turn source text into FileRecords.
"""

from .base import BaseParser
from .python_parser import PythonParser
from .typescript_parser import TypeScriptParser
from .registry import EXTENSION_LANGUAGES, ParserRegistry, language_for_path

__all__ = [
    # Base types
    "BaseParser",
    # Registry
    "ParserRegistry",
    "EXTENSION_LANGUAGES",
    "language_for_path",
    # Parsers
    "PythonParser",
    "TypeScriptParser",
]
