# graph_watcher/config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Configuration models for the graph watcher.

Defines the structure of YAML configuration files and the environment
overrides read from .env.
"""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from code_connect.graph.models import NODE_KINDS
from code_connect.scanner import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    DEFAULT_MAX_FILES,
)

OutputFormat = Literal["json", "elements", "mermaid"]

DEFAULT_OUTPUT_NAME = "code-connect.json"


class WatchSettings(BaseModel):
    """Polling and debounce settings.

    Attributes:
        poll_interval: Seconds between filesystem snapshots.
        debounce_seconds: Quiet period after the last change before rebuilding.
    """

    poll_interval: float = Field(default=2.0, gt=0)
    debounce_seconds: float = Field(default=1.0, ge=0)


class GraphConfig(BaseModel):
    """Configuration for a graph build.

    This model maps directly to the YAML configuration file format.

    Attributes:
        workspace_root: Directory to scan.
        include_patterns: Globs (relative to the root) a file must match.
        exclude_patterns: Globs that drop files and whole directories.
        max_files: Upper bound on parsed files.
        fuzzy_imports: Use substring matching as the last import resolution step.
        output: Output file; <workspace_root>/code-connect.json when unset.
        output_format: "json" (graph payload), "elements" (renderer
            elements) or "mermaid".
        node_types: Optional view filter, e.g. ["file"] for an import-only view.
        watch: Polling settings for watch mode.

    Example YAML:
        workspace_root: ~/projects/webapp
        max_files: 20000
        output: build/graph.json
        output_format: json
        node_types: [folder, file]
        exclude_patterns:
          - "**/node_modules/**"
          - "**/dist/**"
        watch:
          poll_interval: 2.0
          debounce_seconds: 1.0
    """

    workspace_root: Path
    include_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    max_files: int = Field(default=DEFAULT_MAX_FILES, gt=0)
    fuzzy_imports: bool = True
    output: Optional[Path] = None
    output_format: OutputFormat = "json"
    node_types: Optional[list[str]] = None
    watch: WatchSettings = Field(default_factory=WatchSettings)

    @field_validator("workspace_root", mode="after")
    @classmethod
    def _expand_root(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("node_types", mode="after")
    @classmethod
    def _known_node_types(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        unknown = [kind for kind in value if kind not in NODE_KINDS]
        if unknown:
            raise ValueError(f"Unknown node types {unknown}, expected {list(NODE_KINDS)}")
        return value

    @property
    def output_path(self) -> Path:
        """Resolved output file."""
        if self.output is None:
            return self.workspace_root / DEFAULT_OUTPUT_NAME
        return self.output.expanduser()

    @classmethod
    def from_yaml(cls, config_path: Path) -> "GraphConfig":
        """Load configuration from a YAML file.

        Relative workspace_root and output paths are taken relative to the
        config file's directory.

        Raises:
            OSError: File cannot be read.
            yaml.YAMLError: Invalid YAML.
            pydantic.ValidationError: Invalid configuration values.
        """
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {config_path}")

        base = Path(config_path).parent
        for key in ("workspace_root", "output"):
            value = data.get(key)
            if value and not Path(value).expanduser().is_absolute():
                data[key] = str(base / value)
        return cls(**data)

    def with_env(self, dotenv_path: Optional[str] = None) -> "GraphConfig":
        """Apply CODE_CONNECT_* overrides from the environment / .env file."""
        if dotenv_path is not None:
            load_dotenv(dotenv_path)
        else:
            load_dotenv()

        updates: dict = {}
        workspace = os.getenv("CODE_CONNECT_WORKSPACE")
        if workspace:
            updates["workspace_root"] = workspace
        max_files = os.getenv("CODE_CONNECT_MAX_FILES")
        if max_files:
            updates["max_files"] = int(max_files)

        watch = self.watch.model_dump()
        poll_interval = os.getenv("CODE_CONNECT_POLL_INTERVAL")
        if poll_interval:
            watch["poll_interval"] = float(poll_interval)
        debounce = os.getenv("CODE_CONNECT_DEBOUNCE_SECONDS")
        if debounce:
            watch["debounce_seconds"] = float(debounce)
        updates["watch"] = watch

        return self.model_validate({**self.model_dump(), **updates})
