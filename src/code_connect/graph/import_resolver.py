# code_connect/graph/import_resolver.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Import target resolution.

Maps an import's source string to one of the scanned files using an ordered
chain of strategies. This is a best-effort heuristic, not a module resolver:
no package.json, no tsconfig paths, no site-packages. An import that no
strategy can place simply has no target.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


SUPPORTED_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".py")


class ImportStrategy(ABC):
    """One step of the resolution chain."""

    name: str = "base"

    @abstractmethod
    def resolve(self, source: str, known_files: Sequence[str], file_set: set[str]) -> Optional[str]:
        """Return the matching known file path, or None.

        Args:
            source: Import source (absolute path or raw module specifier)
            known_files: Known file paths in scan order
            file_set: The same paths as a set, for O(1) membership tests
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ExactPathStrategy(ImportStrategy):
    """source is already the full path of a known file."""

    name = "exact"

    def resolve(self, source, known_files, file_set):
        return source if source in file_set else None


class ExtensionStrategy(ImportStrategy):
    """Append each supported extension: "./utils" -> "./utils.ts"."""

    name = "extension"

    def __init__(self, extensions: Sequence[str] = SUPPORTED_EXTENSIONS):
        self.extensions = tuple(extensions)

    def resolve(self, source, known_files, file_set):
        for ext in self.extensions:
            candidate = source + ext
            if candidate in file_set:
                return candidate
        return None


class IndexFileStrategy(ImportStrategy):
    """Directory import: "./components" -> "./components/index.js"."""

    name = "index"

    def __init__(self, extensions: Sequence[str] = SUPPORTED_EXTENSIONS):
        self.extensions = tuple(extensions)

    def resolve(self, source, known_files, file_set):
        for ext in self.extensions:
            candidate = os.path.join(source, f"index{ext}")
            if candidate in file_set:
                return candidate
        return None


class FuzzyPathStrategy(ImportStrategy):
    """Last resort: first known path that ends with or contains source.

    Substring matching happily picks the wrong file when names repeat across
    folders ("utils" matches every utils.py), which is why it runs after
    every exact strategy and can be left out of the chain entirely.
    """

    name = "fuzzy"

    def resolve(self, source, known_files, file_set):
        for file_path in known_files:
            if file_path.endswith(source) or source in file_path:
                return file_path
        return None


def default_strategies(fuzzy: bool = True) -> list[ImportStrategy]:
    """The standard chain: exact, extension, index file, then fuzzy.

    Args:
        fuzzy: Include the substring fallback as the final stage.
    """
    strategies: list[ImportStrategy] = [
        ExactPathStrategy(),
        ExtensionStrategy(),
        IndexFileStrategy(),
    ]
    if fuzzy:
        strategies.append(FuzzyPathStrategy())
    return strategies


class ImportResolver:
    """Resolves import sources to known file paths.

    Strategies run in order and the first non-None answer wins, so an exact
    or extension match always beats a fuzzy one.
    """

    def __init__(
        self,
        known_files: Iterable[str],
        strategies: Optional[Sequence[ImportStrategy]] = None,
    ):
        """Initialize resolver over a fixed set of files.

        Args:
            known_files: Paths of every scanned file, in scan order. The order
                         decides which file the fuzzy stage finds first.
            strategies: Resolution chain; default_strategies() when omitted.
        """
        self.known_files: list[str] = list(known_files)
        self._file_set = set(self.known_files)
        self.strategies: list[ImportStrategy] = (
            list(strategies) if strategies is not None else default_strategies()
        )

    def resolve(self, source: Optional[str]) -> Optional[str]:
        """Resolve an import source to a known file path.

        Args:
            source: Import source as recorded by the parser.

        Returns:
            Path of the target file, or None if nothing matched (external
            packages, missing files). An empty source never matches.
        """
        if not source:
            return None

        for strategy in self.strategies:
            target = strategy.resolve(source, self.known_files, self._file_set)
            if target is not None:
                logger.debug(f"Resolved import {source!r} -> {target} ({strategy.name})")
                return target
        return None
