# code_connect/scanner.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Workspace scanner.

Finds source files under a workspace root, filters them through include and
exclude globs, and parses each into a FileRecord. The resulting
{path: FileRecord} map is the input of GraphBuilder.build().
"""

import fnmatch
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence

from code_connect.parsers import ParserRegistry, language_for_path
from code_connect.records import SUPPORTED_LANGUAGES, FileRecord

logger = logging.getLogger(__name__)


DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = (
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.py",
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    # Python environments and installed packages
    "**/site-packages/**",
    "**/dist-packages/**",
    "**/__pycache__/**",
    "**/venv/**",
    "**/.venv/**",
    "**/env/**",
    # JS package folders
    "**/node_modules/**",
    "**/bower_components/**",
    # Build output
    "**/dist/**",
    "**/build/**",
    "**/out/**",
    "**/.next/**",
    "**/.cache/**",
    "**/coverage/**",
    # VCS and editor folders
    "**/.git/**",
    "**/.idea/**",
    "**/.vscode/**",
    # Tests and generated files
    "**/__tests__/**",
    "**/test/**",
    "**/tests/**",
    "**/*.test.*",
    "**/*.spec.*",
    "**/*.min.*",
)

DEFAULT_MAX_FILES = 50000


def matches_any(rel_path: str, patterns: Sequence[str]) -> bool:
    """Match a workspace-relative POSIX path against ** style globs.

    The path is also tried with a leading "/" so that "**/x" patterns
    cover files directly at the root.
    """
    rel_path = rel_path.lstrip("/")
    anchored = "/" + rel_path
    return any(
        fnmatch.fnmatchcase(rel_path, pattern) or fnmatch.fnmatchcase(anchored, pattern)
        for pattern in patterns
    )


@dataclass
class ScanStats:
    """Counts over the currently scanned files."""

    total_files: int = 0
    total_functions: int = 0
    total_imports: int = 0
    total_exports: int = 0
    by_language: dict[str, int] = field(
        default_factory=lambda: {lang: 0 for lang in SUPPORTED_LANGUAGES}
    )


class Scanner:
    """Discovers and parses the source files of one workspace.

    Keeps the parsed records between calls, so a watcher can refresh single
    files with scan_file() / remove_file() and hand get_files() to the
    builder after every change.
    """

    def __init__(
        self,
        workspace_root: Path,
        include_patterns: Sequence[str] = DEFAULT_INCLUDE_PATTERNS,
        exclude_patterns: Sequence[str] = DEFAULT_EXCLUDE_PATTERNS,
        max_files: int = DEFAULT_MAX_FILES,
        registry: Optional[ParserRegistry] = None,
    ):
        """Initialize scanner.

        Args:
            workspace_root: Directory to scan.
            include_patterns: Globs a file must match (relative to the root).
            exclude_patterns: Globs that drop a file or a whole directory.
            max_files: Upper bound on files parsed per scan.
            registry: Parser registry; a new one is created when omitted.
        """
        self.workspace_root = Path(workspace_root).resolve()
        self.include_patterns = tuple(include_patterns)
        self.exclude_patterns = tuple(exclude_patterns)
        self.max_files = max_files
        self.registry = registry or ParserRegistry()
        self.files: dict[str, FileRecord] = {}

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.workspace_root).as_posix()

    def should_include(self, path: Path) -> bool:
        """True when path is inside the root, included, and not excluded."""
        path = Path(path)
        try:
            rel = self._relative(path)
        except ValueError:
            return False
        if language_for_path(str(path)) is None:
            return False
        if not matches_any(rel, self.include_patterns):
            return False
        return not matches_any(rel, self.exclude_patterns)

    def _excluded_dir(self, rel_dir: str) -> bool:
        # "/node_modules/" matches "**/node_modules/**"
        return matches_any(rel_dir + "/", self.exclude_patterns)

    def iter_files(self) -> Iterator[Path]:
        """Yield matching files in a stable (sorted) order, up to max_files."""
        if not self.workspace_root.is_dir():
            logger.warning(f"Workspace root does not exist: {self.workspace_root}")
            return

        count = 0
        for dirpath, dirnames, filenames in os.walk(self.workspace_root):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d for d in dirnames if not self._excluded_dir(self._relative(current / d))
            )
            for filename in sorted(filenames):
                path = current / filename
                if not self.should_include(path):
                    continue
                if count >= self.max_files:
                    logger.warning(f"File limit of {self.max_files} reached, stopping scan")
                    return
                count += 1
                yield path

    def scan(self) -> dict[str, FileRecord]:
        """Scan the whole workspace, replacing any previous results.

        Returns:
            Map of absolute path -> FileRecord, in discovery order.
        """
        self.clear()
        logger.info(f"Scanning {self.workspace_root}")

        for path in self.iter_files():
            self.scan_file(path)

        stats = self.get_stats()
        logger.info(
            f"Scan complete: {stats.total_files} files, {stats.total_functions} functions, "
            f"{stats.total_imports} imports"
        )
        return self.get_files()

    def scan_file(self, path: Path) -> Optional[FileRecord]:
        """Parse one file and store its record.

        Returns:
            The new record, or None when the file is unsupported, unreadable,
            or no parser is available for it. Errors are logged, not raised.
        """
        path = Path(path)
        file_path = str(path)
        language = language_for_path(file_path)
        if language is None:
            return None

        parser = self.registry.get_parser(language)
        if parser is None or not parser.is_available():
            logger.debug(f"No parser available for {language}, skipping {file_path}")
            return None

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            return None

        record = parser.parse_file(content, file_path)
        self.files[file_path] = record
        return record

    def remove_file(self, path: Path) -> bool:
        """Forget a file (e.g. after deletion). Returns True if it was known."""
        return self.files.pop(str(path), None) is not None

    def clear(self) -> None:
        self.files.clear()

    def get_files(self) -> dict[str, FileRecord]:
        """Copy of the current path -> record map."""
        return dict(self.files)

    def get_file(self, path: str) -> Optional[FileRecord]:
        return self.files.get(path)

    def get_stats(self) -> ScanStats:
        stats = ScanStats(total_files=len(self.files))
        for record in self.files.values():
            stats.total_functions += len(record.functions)
            stats.total_imports += len(record.imports)
            stats.total_exports += len(record.exports)
            if record.language in stats.by_language:
                stats.by_language[record.language] += 1
        return stats
