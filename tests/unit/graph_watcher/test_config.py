# tests/unit/graph_watcher/test_config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for graph_watcher.config.

Tests the configuration models: WatchSettings and GraphConfig.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from code_connect.scanner import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_MAX_FILES
from graph_watcher.config import GraphConfig, WatchSettings


class TestWatchSettings:
    """Tests for WatchSettings model."""

    def test_defaults(self):
        settings = WatchSettings()
        assert settings.poll_interval == 2.0
        assert settings.debounce_seconds == 1.0

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            WatchSettings(poll_interval=0)

    def test_zero_debounce_allowed(self):
        assert WatchSettings(debounce_seconds=0).debounce_seconds == 0


class TestGraphConfig:
    """Tests for GraphConfig model."""

    def test_minimal_config(self, tmp_path):
        """Can create GraphConfig with the workspace only."""
        config = GraphConfig(workspace_root=tmp_path)

        assert config.workspace_root == tmp_path.resolve()
        assert config.max_files == DEFAULT_MAX_FILES
        assert config.exclude_patterns == list(DEFAULT_EXCLUDE_PATTERNS)
        assert config.fuzzy_imports is True
        assert config.output_format == "json"
        assert config.node_types is None

    def test_default_output_path(self, tmp_path):
        config = GraphConfig(workspace_root=tmp_path)
        assert config.output_path == tmp_path.resolve() / "code-connect.json"

    def test_explicit_output_path(self, tmp_path):
        config = GraphConfig(workspace_root=tmp_path, output=tmp_path / "out" / "g.json")
        assert config.output_path == tmp_path / "out" / "g.json"

    def test_workspace_root_is_expanded(self):
        config = GraphConfig(workspace_root="~")
        assert config.workspace_root == Path.home().resolve()

    def test_node_types_validated(self, tmp_path):
        with pytest.raises(ValidationError, match="Unknown node types"):
            GraphConfig(workspace_root=tmp_path, node_types=["file", "module"])

    def test_output_format_validated(self, tmp_path):
        with pytest.raises(ValidationError):
            GraphConfig(workspace_root=tmp_path, output_format="dot")

    def test_max_files_positive(self, tmp_path):
        with pytest.raises(ValidationError):
            GraphConfig(workspace_root=tmp_path, max_files=0)


class TestFromYaml:
    """Tests for GraphConfig.from_yaml."""

    def test_relative_paths_resolve_against_config_dir(self, tmp_path):
        (tmp_path / "project").mkdir()
        config_path = tmp_path / "graph.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "workspace_root": "project",
                    "output": "build/graph.json",
                    "output_format": "mermaid",
                    "node_types": ["folder", "file"],
                    "watch": {"poll_interval": 0.5},
                }
            )
        )

        config = GraphConfig.from_yaml(config_path)

        assert config.workspace_root == (tmp_path / "project").resolve()
        assert config.output == tmp_path / "build" / "graph.json"
        assert config.output_format == "mermaid"
        assert config.node_types == ["folder", "file"]
        assert config.watch.poll_interval == 0.5
        assert config.watch.debounce_seconds == 1.0

    def test_absolute_workspace_kept(self, tmp_path):
        config_path = tmp_path / "graph.yaml"
        config_path.write_text(f"workspace_root: {tmp_path}\n")

        assert GraphConfig.from_yaml(config_path).workspace_root == tmp_path.resolve()

    def test_missing_workspace_rejected(self, tmp_path):
        config_path = tmp_path / "graph.yaml"
        config_path.write_text("max_files: 10\n")

        with pytest.raises(ValidationError):
            GraphConfig.from_yaml(config_path)

    def test_non_mapping_rejected(self, tmp_path):
        config_path = tmp_path / "graph.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="Expected a mapping"):
            GraphConfig.from_yaml(config_path)


class TestWithEnv:
    """Tests for environment overrides."""

    def test_env_overrides(self, tmp_path, monkeypatch):
        other = tmp_path / "other"
        other.mkdir()
        monkeypatch.setenv("CODE_CONNECT_WORKSPACE", str(other))
        monkeypatch.setenv("CODE_CONNECT_MAX_FILES", "25")
        monkeypatch.setenv("CODE_CONNECT_POLL_INTERVAL", "0.25")
        monkeypatch.setenv("CODE_CONNECT_DEBOUNCE_SECONDS", "0")

        config = GraphConfig(workspace_root=tmp_path).with_env(str(tmp_path / "missing.env"))

        assert config.workspace_root == other.resolve()
        assert config.max_files == 25
        assert config.watch.poll_interval == 0.25
        assert config.watch.debounce_seconds == 0

    def test_no_env_keeps_values(self, tmp_path, monkeypatch):
        for name in (
            "CODE_CONNECT_WORKSPACE",
            "CODE_CONNECT_MAX_FILES",
            "CODE_CONNECT_POLL_INTERVAL",
            "CODE_CONNECT_DEBOUNCE_SECONDS",
        ):
            monkeypatch.delenv(name, raising=False)

        config = GraphConfig(workspace_root=tmp_path, max_files=7)
        updated = config.with_env(str(tmp_path / "missing.env"))

        assert updated == config

    def test_invalid_number(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CODE_CONNECT_MAX_FILES", "many")

        with pytest.raises(ValueError):
            GraphConfig(workspace_root=tmp_path).with_env(str(tmp_path / "missing.env"))
