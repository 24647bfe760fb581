# code_connect/parsers/base.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Base parser interface for File Record extraction.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from code_connect.records import (
    CallInfo,
    ExportInfo,
    FileRecord,
    FunctionInfo,
    ImportInfo,
)

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Base class for tree-sitter language parsers.

    Subclasses load their grammar in _load_parser() and implement the four
    extract_* methods. parse_file() combines them into a FileRecord.
    All line numbers produced are 0-based.
    """

    # Language names this parser produces records for
    languages: tuple[str, ...] = ()

    def __init__(self):
        """Initialize parser with language-specific tree-sitter."""
        self.parser = None
        self.language = None
        self._load_parser()

    @abstractmethod
    def _load_parser(self) -> None:
        """Load the tree-sitter parser for this language."""
        pass

    def is_available(self) -> bool:
        """Check if parser loaded successfully."""
        return self.parser is not None and self.language is not None

    def get_language_name(self) -> str:
        """Get the primary language name for this parser."""
        if self.languages:
            return self.languages[0]
        return self.__class__.__name__.replace("Parser", "").lower()

    def parse(self, content: str, file_path: str = "") -> Optional["tree_sitter.Tree"]:
        """Parse source code and return the AST.

        Args:
            content: Source code as string.
            file_path: Path of the file, for parsers that pick a grammar by
                       extension.

        Returns:
            Tree-sitter Tree or None if parser unavailable.
        """
        if not self.is_available():
            return None
        return self.parser.parse(content.encode())

    @abstractmethod
    def extract_functions(self, tree, file_path: str) -> list[FunctionInfo]:
        """Extract function, method and function-valued variable definitions."""
        pass

    @abstractmethod
    def extract_imports(self, tree, file_path: str) -> list[ImportInfo]:
        """Extract imports, one entry per imported symbol.

        Relative imports are resolved to absolute paths against file_path.
        """
        pass

    @abstractmethod
    def extract_exports(self, tree, file_path: str) -> list[ExportInfo]:
        """Extract exported symbols."""
        pass

    @abstractmethod
    def extract_calls(self, tree, file_path: str) -> list[CallInfo]:
        """Extract every call site in the file."""
        pass

    def detect_language(self, file_path: str) -> str:
        """Language name recorded for file_path."""
        return self.get_language_name()

    def parse_file(self, content: str, file_path: str) -> FileRecord:
        """Parse a source file into a FileRecord.

        Args:
            content: Source code as string.
            file_path: Absolute path to the source file.

        Returns:
            FileRecord with functions, imports, exports and calls. A file the
            grammar cannot handle yields an empty record instead of raising.
        """
        language = self.detect_language(file_path)
        try:
            tree = self.parse(content, file_path)
            if tree is None:
                return FileRecord.empty(file_path, language)

            return FileRecord(
                path=file_path,
                language=language,
                functions=self.extract_functions(tree, file_path),
                imports=self.extract_imports(tree, file_path),
                exports=self.extract_exports(tree, file_path),
                calls=self.extract_calls(tree, file_path),
            )
        except Exception as e:
            logger.warning(f"Parse error in {file_path}: {e}")
            return FileRecord.empty(file_path, language)

    def _get_node_text(self, node) -> str:
        """Get the text content of a node."""
        return node.text.decode("utf-8", errors="replace")

    def _get_node_line(self, node) -> int:
        """Get the 0-indexed line number of a node."""
        return node.start_point[0]

    def _get_node_end_line(self, node) -> int:
        """Get the 0-indexed end line number of a node."""
        return node.end_point[0]

    def _walk_tree(self, node) -> Iterator:
        """Walk all nodes in a tree using a generator."""
        yield node
        for child in node.children:
            yield from self._walk_tree(child)
