#!/usr/bin/env python3
"""
gqlhttp CLI - Main entry point.

Usage:
    gqlhttp init                           # Write default gqlhttp.yaml
    gqlhttp serve app.schema:schema        # Serve a schema object
    gqlhttp serve schema.graphql --root app.resolvers:root
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from graphql import GraphQLSchema, build_schema

from ..config import DEFAULT_CONFIG_PATH, ServerConfig, load_config

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def import_object(target: str) -> Any:
    """Import ``module:attribute`` (attribute may be dotted)."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Expected 'module:attribute', got {target!r}")

    if str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def load_schema(target: str) -> GraphQLSchema:
    """
    Load a schema from an SDL file or a ``module:attribute`` reference.

    The attribute may be a GraphQLSchema or an SDL string.
    """
    path = Path(target)
    if path.suffix in (".graphql", ".graphqls", ".gql") and path.exists():
        return build_schema(path.read_text())

    obj = import_object(target)
    if isinstance(obj, GraphQLSchema):
        return obj
    if isinstance(obj, str):
        return build_schema(obj)
    raise TypeError(f"{target} is neither a GraphQLSchema nor an SDL string")


def cmd_init(args: argparse.Namespace) -> int:
    """Write a default configuration file."""
    config_path = Path(args.config or DEFAULT_CONFIG_PATH)

    if config_path.exists() and not args.force:
        print(f"Error: {config_path} already exists. Use --force to overwrite.")
        return 1

    ServerConfig().save(config_path)
    print(f"Created {config_path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run a GraphQL server with uvicorn."""
    import uvicorn

    from ..server import GraphQLServer

    config = load_config(args.config) or ServerConfig()
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.no_graphiql:
        config.graphiql = False

    configure_logging(config.log_level)

    try:
        schema = load_schema(args.schema)
        root_value = import_object(args.root) if args.root else None
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        print(f"Error loading schema: {e}")
        return 1

    server = GraphQLServer(schema, config=config, root_value=root_value)
    logger.info(f"Serving GraphQL on http://{config.host}:{config.port}{config.path}")
    uvicorn.run(server.app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="gqlhttp",
        description="gqlhttp - GraphQL over HTTP server",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Write default configuration")
    init_parser.add_argument("--config", "-c", help="Config file path")
    init_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing config")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Serve a schema")
    serve_parser.add_argument("schema", help="SDL file or module:attribute")
    serve_parser.add_argument("--root", "-r", help="Root value as module:attribute")
    serve_parser.add_argument("--config", "-c", help="Config file path")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", "-p", type=int, help="Bind port")
    serve_parser.add_argument("--no-graphiql", action="store_true", help="Disable GraphiQL")

    return parser


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "serve": cmd_serve,
    }

    handler = commands.get(parsed.command)
    if handler:
        return handler(parsed)

    parser.print_help()
    return 1


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()
