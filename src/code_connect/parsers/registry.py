# code_connect/parsers/registry.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Language lookup and parser instances for the scanner."""

import os
import warnings
from typing import Optional

from .base import BaseParser
from .python_parser import PythonParser
from .typescript_parser import TypeScriptParser

PARSER_CLASSES: tuple[type[BaseParser], ...] = (PythonParser, TypeScriptParser)

EXTENSION_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
}


def language_for_path(file_path: str) -> Optional[str]:
    """Language name for a file, by extension. None for unsupported files."""
    return EXTENSION_LANGUAGES.get(os.path.splitext(file_path)[1].lower())


class ParserRegistry:
    """Holds one parser instance per language.

    A parser serving several languages (TypeScript also parses JavaScript) is
    registered under each of them. Parsers whose grammar package is missing
    are skipped with a warning, so the scanner simply ignores their files.
    """

    def __init__(self, parser_classes: tuple[type[BaseParser], ...] = PARSER_CLASSES):
        """Instantiate every parser class whose grammar loads.

        Args:
            parser_classes: Parsers to try; an empty tuple gives a registry
                            that parses nothing.
        """
        self._parsers: dict[str, BaseParser] = {}
        for parser_class in parser_classes:
            self._register(parser_class)

    def _register(self, parser_class: type[BaseParser]) -> None:
        try:
            parser = parser_class()
        except Exception as e:
            warnings.warn(f"Could not create {parser_class.__name__}: {e}")
            return

        if not parser.is_available():
            warnings.warn(f"{parser_class.__name__} has no tree-sitter grammar, skipping")
            return

        for lang_name in parser.languages or (parser.get_language_name(),):
            self._parsers[lang_name] = parser

    def get_parser(self, language: str) -> Optional[BaseParser]:
        """Parser for a language name (case-insensitive), or None."""
        return self._parsers.get(language.lower())

    def get_parser_for_path(self, file_path: str) -> Optional[BaseParser]:
        """Parser for a file, chosen by its extension."""
        language = language_for_path(file_path)
        if language is None:
            return None
        return self.get_parser(language)

    def has_parser(self, language: str) -> bool:
        return language.lower() in self._parsers

    def list_available_languages(self) -> list[str]:
        """Sorted names of the languages that can be parsed."""
        return sorted(self._parsers)

    def __repr__(self) -> str:
        return f"ParserRegistry({', '.join(self.list_available_languages())})"
