# tests/unit/graph_watcher/test_main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for the graph_watcher command line.
"""

import json

import pytest

from code_connect.graph import GraphBuilder
from graph_watcher.config import GraphConfig
from graph_watcher.main import build_parser, load_config, main, render, write_output


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CODE_CONNECT_WORKSPACE",
        "CODE_CONNECT_MAX_FILES",
        "CODE_CONNECT_POLL_INTERVAL",
        "CODE_CONNECT_DEBOUNCE_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Command line flags layered over the config file."""

    def test_workspace_argument(self, tmp_path):
        args = build_parser().parse_args([str(tmp_path)])
        config = load_config(args)

        assert config.workspace_root == tmp_path.resolve()
        assert config.output_format == "json"

    def test_flags_override_config_file(self, tmp_path):
        config_path = tmp_path / "graph.yaml"
        config_path.write_text("workspace_root: .\noutput_format: mermaid\n")

        args = build_parser().parse_args(
            [
                "--config",
                str(config_path),
                "--format",
                "elements",
                "--types",
                "file, function",
                "--no-fuzzy",
                "--output",
                str(tmp_path / "out.json"),
            ]
        )
        config = load_config(args)

        assert config.workspace_root == tmp_path.resolve()
        assert config.output_format == "elements"
        assert config.node_types == ["file", "function"]
        assert config.fuzzy_imports is False
        assert config.output_path == tmp_path / "out.json"

    def test_unknown_type_rejected(self, tmp_path):
        args = build_parser().parse_args([str(tmp_path), "--types", "module"])
        with pytest.raises(ValueError):
            load_config(args)


class TestOutput:
    """Rendering and writing."""

    def test_render_formats(self, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)

        assert json.loads(render(graph, "json"))["stats"]["totalNodes"] == 5
        assert len(json.loads(render(graph, "elements"))) == 10
        assert render(graph, "mermaid").startswith("graph TD")

    def test_write_output_applies_node_filter(self, tmp_path, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        config = GraphConfig(
            workspace_root=tmp_path, output=tmp_path / "g.json", node_types=["file"]
        )

        path = write_output(graph, config)

        with open(path) as f:
            payload = json.load(f)
        assert payload["stats"]["totalNodes"] == 2
        assert payload["stats"]["edgesByType"]["imports"] == 1

    def test_write_mermaid(self, tmp_path, workspace, two_file_records):
        graph = GraphBuilder(workspace).build(two_file_records)
        config = GraphConfig(
            workspace_root=tmp_path, output=tmp_path / "deps.mmd", output_format="mermaid"
        )

        path = write_output(graph, config)
        assert path.read_text().startswith("graph TD")


class TestMain:
    """End-to-end CLI runs."""

    def test_missing_config_file(self, tmp_path):
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "graph.yaml"
        config_path.write_text("workspace_root: [unclosed\n")
        assert main(["--config", str(config_path)]) == 1

    def test_missing_workspace(self, tmp_path):
        assert main([str(tmp_path / "absent")]) == 1

    def test_builds_python_workspace(self, tmp_path, capsys):
        pytest.importorskip("tree_sitter_python")
        pkg = tmp_path / "pkg"
        pkg.mkdir()
        (pkg / "a.py").write_text("from .b import helper\n\ndef run():\n    helper()\n")
        (pkg / "b.py").write_text("def helper():\n    return 1\n")
        out = tmp_path / "graph.json"

        assert main([str(tmp_path), "--output", str(out)]) == 0

        with open(out) as f:
            payload = json.load(f)
        stats = payload["stats"]
        assert stats["nodesByType"] == {"folder": 1, "file": 2, "function": 2}
        assert stats["edgesByType"] == {"contains": 4, "imports": 1, "calls": 0}
        assert "Done." in capsys.readouterr().out
