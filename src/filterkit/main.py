"""
CLI entry point for filterkit.

Subcommands: list, help, validate, sanitize. Values and option values are parsed
as JSON when possible (so 3 is a number and "3" a string), otherwise taken as
raw strings.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import structlog
from rich.console import Console

from filterkit.config.settings import get_settings
from filterkit.dispatcher import Dispatcher
from filterkit.introspection import print_help
from filterkit.loader import load_default_filters, load_filters_from_directory
from filterkit.registry import FilterRegistry
from filterkit.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def parse_value(raw: str) -> Any:
    """Parse a CLI value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_options(pairs: Optional[List[str]]) -> Dict[str, Any]:
    """Parse repeated key=value arguments into an options mapping."""
    options: Dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Option must be key=value, got {pair!r}")
        options[key] = parse_value(raw)
    return options


def build_registry(extra_dirs: Optional[List[str]] = None) -> FilterRegistry:
    """Default discovery plus any --filters-dir directories."""
    registry = FilterRegistry()
    load_default_filters(registry)
    for directory in extra_dirs or []:
        load_filters_from_directory(registry, directory)
    return registry


def _cmd_list(registry: FilterRegistry, console: Console) -> int:
    for name in registry.list():
        console.print(name)
    return 0


def _cmd_help(registry: FilterRegistry, name: str, console: Console) -> int:
    print_help(registry, name, console=console)
    return 0


def _cmd_validate(registry: FilterRegistry, filter_name: str, raw_value: str, options: Dict[str, Any]) -> int:
    value = parse_value(raw_value)
    Dispatcher(registry).validate(value, filter_name, options)
    print(json.dumps({"filter": filter_name, "valid": True, "value": value}, default=str))
    return 0


def _cmd_sanitize(registry: FilterRegistry, filter_name: str, raw_value: str, options: Dict[str, Any]) -> int:
    value = parse_value(raw_value)
    sanitized = Dispatcher(registry).sanitize(value, filter_name, options)
    print(json.dumps({"filter": filter_name, "value": sanitized}, default=str))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI args and dispatch to subcommands. Returns 0 on success, 1 on failure."""
    parser = argparse.ArgumentParser(
        prog="filterkit",
        description="Validate and sanitize values with registered filters.",
    )
    parser.add_argument(
        "--filters-dir",
        action="append",
        default=[],
        help="Additional directory to scan for filter modules (repeatable).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List registered filters.")

    help_p = subparsers.add_parser("help", help="Show a filter's description and options.")
    help_p.add_argument("name", help="Filter name.")

    for command in ("validate", "sanitize"):
        p = subparsers.add_parser(command, help=f"{command.capitalize()} a value with a filter.")
        p.add_argument("filter", help="Filter name.")
        p.add_argument("value", help="Value (parsed as JSON when possible).")
        p.add_argument(
            "-o",
            "--option",
            action="append",
            dest="options",
            metavar="KEY=VALUE",
            help="Option override (repeatable).",
        )

    args = parser.parse_args(argv)
    configure_logging(get_settings().logging)
    console = Console()
    registry = build_registry(args.filters_dir)

    try:
        if args.command == "list":
            return _cmd_list(registry, console)
        if args.command == "help":
            return _cmd_help(registry, args.name, console)
        options = parse_options(args.options)
        if args.command == "validate":
            return _cmd_validate(registry, args.filter, args.value, options)
        return _cmd_sanitize(registry, args.filter, args.value, options)
    except Exception as e:
        # FilterError from the core, or anything a filter body raises
        logger.info("filter_command_failed", command=args.command, error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
