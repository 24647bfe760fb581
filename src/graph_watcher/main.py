# graph_watcher/main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CLI entry point for code-connect.

Usage:
    python -m graph_watcher ~/projects/webapp
    python -m graph_watcher --config config/code-connect.yaml --watch
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from code_connect.graph import (
    GraphBuilder,
    GraphData,
    default_strategies,
    filter_graph,
    generate_mermaid,
    save_graph,
    to_elements,
)
from code_connect.scanner import Scanner

from .config import GraphConfig
from .watcher import GraphWatcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a folder/file/function dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Graph the current directory into ./code-connect.json
    python -m graph_watcher .

    # File-level import view as a mermaid diagram
    python -m graph_watcher src --types file --format mermaid --output deps.mmd

    # Rebuild on every change
    python -m graph_watcher --config config/code-connect.yaml --watch
        """,
    )
    parser.add_argument(
        "workspace",
        nargs="?",
        type=Path,
        help="Workspace root (overrides workspace_root from --config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration YAML file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output file (default: <workspace>/code-connect.json)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "elements", "mermaid"],
        help="Output format",
    )
    parser.add_argument(
        "--types",
        help="Comma separated node types to keep, e.g. folder,file",
    )
    parser.add_argument(
        "--no-fuzzy",
        action="store_true",
        help="Disable substring matching when resolving imports",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and rebuild when files change",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser


def load_config(args: argparse.Namespace) -> GraphConfig:
    """Merge config file, environment and command line into one GraphConfig.

    Command line flags win over the environment, which wins over the file.

    Raises:
        ValueError: No workspace given anywhere, or invalid values.
    """
    if args.config is not None:
        config = GraphConfig.from_yaml(args.config)
    elif args.workspace is not None:
        config = GraphConfig(workspace_root=args.workspace)
    else:
        config = GraphConfig(workspace_root=Path.cwd())
    config = config.with_env()

    updates: dict = {}
    if args.workspace is not None:
        updates["workspace_root"] = args.workspace
    if args.output is not None:
        updates["output"] = args.output
    if args.format is not None:
        updates["output_format"] = args.format
    if args.types:
        updates["node_types"] = [t.strip() for t in args.types.split(",") if t.strip()]
    if args.no_fuzzy:
        updates["fuzzy_imports"] = False

    if not updates:
        return config
    return GraphConfig.model_validate({**config.model_dump(), **updates})


def render(graph: GraphData, output_format: str) -> str:
    """Serialize a graph in the requested output format."""
    if output_format == "mermaid":
        return generate_mermaid(graph)
    if output_format == "elements":
        return json.dumps(to_elements(graph), indent=2)
    return json.dumps(graph.to_dict(), indent=2)


def write_output(graph: GraphData, config: GraphConfig) -> Path:
    """Apply the node type view and write the graph to config.output_path."""
    if config.node_types:
        graph = filter_graph(graph, config.node_types)

    path = config.output_path
    if config.output_format == "json":
        return save_graph(graph, path)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(render(graph, config.output_format))
    return path


def create_components(config: GraphConfig) -> tuple[Scanner, GraphBuilder]:
    scanner = Scanner(
        config.workspace_root,
        include_patterns=config.include_patterns,
        exclude_patterns=config.exclude_patterns,
        max_files=config.max_files,
    )
    builder = GraphBuilder(
        workspace_root=str(config.workspace_root),
        resolver_strategies=default_strategies(fuzzy=config.fuzzy_imports),
    )
    return scanner, builder


def run_watch(config: GraphConfig, scanner: Scanner, builder: GraphBuilder) -> None:
    def on_rebuild(graph: GraphData) -> None:
        path = write_output(graph, config)
        logger.info(f"Wrote {path}")

    watcher = GraphWatcher(
        scanner,
        builder,
        poll_interval=config.watch.poll_interval,
        debounce_seconds=config.watch.debounce_seconds,
        on_rebuild=on_rebuild,
    )
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        watcher.stop()
        logger.info("Interrupted")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the code-connect CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.config is not None and not args.config.exists():
        logger.error(f"Config file not found: {args.config}")
        return 1

    try:
        config = load_config(args)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in config file: {e}")
        return 1
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if not config.workspace_root.is_dir():
        logger.error(f"Workspace not found: {config.workspace_root}")
        return 1

    scanner, builder = create_components(config)
    available = scanner.registry.list_available_languages()
    if not available:
        logger.error("No tree-sitter grammars available, install tree-sitter-python or tree-sitter-typescript")
        return 1

    print(f"Graphing {config.workspace_root}...")
    print(f"  Languages: {', '.join(available)}")
    print(f"  Output: {config.output_path} ({config.output_format})")

    try:
        files = scanner.scan()
        graph = builder.build(files)
        path = write_output(graph, config)
    except Exception as e:
        logger.exception(f"Graph build failed: {e}")
        return 1

    print(
        f"Done. {graph.stats.total_nodes} nodes, {graph.stats.total_edges} edges "
        f"written to {path}"
    )

    if args.watch:
        run_watch(config, scanner, builder)
    return 0


if __name__ == "__main__":
    sys.exit(main())
