"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from itis_explorer import __version__, prompts
from itis_explorer.config import Settings, get_settings
from itis_explorer.datasources.itis.gateway import SearchGateway
from itis_explorer.dispatch import OperationDispatcher
from itis_explorer.errors import ItisError
from itis_explorer.server import serve

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send logs to stderr; stdout carries protocol output."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def build_dispatcher(settings: Settings) -> OperationDispatcher:
    """Wire a dispatcher to the configured ITIS endpoint."""
    gateway = SearchGateway(base_url=settings.base_url, timeout=settings.timeout)
    return OperationDispatcher(gateway)


def _json_arg(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        msg = f"not valid JSON: {exc.msg}"
        raise argparse.ArgumentTypeError(msg) from None
    if not isinstance(parsed, dict):
        msg = "must be a JSON object"
        raise argparse.ArgumentTypeError(msg)
    return parsed


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="itis-explorer",
        description="Query and explore the ITIS taxonomic index",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'serve' command - JSON lines over stdin/stdout
    subparsers.add_parser("serve", help="Serve operations as JSON lines on stdin/stdout")

    # 'call' command - one operation
    call_parser = subparsers.add_parser("call", help="Run a single operation")
    call_parser.add_argument("operation", help="Operation name, e.g. search_by_scientific_name")
    call_parser.add_argument(
        "--args",
        type=_json_arg,
        default={},
        help='Operation arguments as a JSON object (e.g. \'{"name": "Homo sapiens"}\')',
    )

    # 'prompts' command - list or render prompt templates
    prompts_parser = subparsers.add_parser("prompts", help="List or render prompt templates")
    prompts_parser.add_argument("name", nargs="?", default=None, help="Prompt to render")
    prompts_parser.add_argument(
        "--args",
        type=_json_arg,
        default={},
        help="Prompt arguments as a JSON object",
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_serve(_args: argparse.Namespace) -> int:
    """Handle the 'serve' command."""
    settings = get_settings()
    dispatcher = build_dispatcher(settings)
    logger.info("ITIS explorer serving on stdio (endpoint %s)", settings.base_url)
    serve(dispatcher, sys.stdin, sys.stdout)
    return 0


def cmd_call(args: argparse.Namespace) -> int:
    """Handle the 'call' command: dispatch once and print the payload."""
    dispatcher = build_dispatcher(get_settings())
    payload = dispatcher.dispatch(args.operation, args.args)
    print(json.dumps(payload, indent=2, default=str))
    return 1 if payload.get("is_error") else 0


def cmd_prompts(args: argparse.Namespace) -> int:
    """Handle the 'prompts' command."""
    if args.name is None:
        for p in prompts.list_prompts():
            print(f"{p['name']}: {p['description']}")
        return 0
    try:
        rendered = prompts.get_prompt(args.name, args.args)
    except ItisError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(rendered["messages"][0]["content"]["text"])
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Endpoint: {settings.base_url}")
    print(f"Timeout: {settings.timeout}s")
    print(f"Debug: {settings.debug}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging("DEBUG" if args.debug else settings.effective_log_level)

    commands = {
        "serve": cmd_serve,
        "call": cmd_call,
        "prompts": cmd_prompts,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
