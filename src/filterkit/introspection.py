"""
Help text for registered filters.

describe() builds the plain-text help; print_help() renders the same content
with Rich and returns the plain text.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from filterkit.errors import MissingArgumentError
from filterkit.models import FilterDescriptor
from filterkit.registry import FilterRegistry

NO_DESCRIPTION = "No description available."
NO_OPTION_DESCRIPTION = "No description"
NO_OPTIONS = "This filter takes no option."


def render_default(value: Any) -> str:
    """JSON rendering of an option default; repr() for values JSON can't encode."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _lookup(registry: FilterRegistry, name: Optional[str]) -> FilterDescriptor:
    if not name:
        raise MissingArgumentError(
            "Specify the filter you need help about, one of: " + ", ".join(registry.list())
        )
    return registry.lookup(name)


def describe(registry: FilterRegistry, name: Optional[str] = None) -> str:
    """Return human-readable help for the named filter."""
    descriptor = _lookup(registry, name)

    lines: List[str] = [f"Help for filter {name}:"]
    lines.append(f"| {descriptor.description or NO_DESCRIPTION}")
    if not descriptor.options:
        lines.append(f"| {NO_OPTIONS}")
    else:
        lines.append("| Options:")
        for option, spec in descriptor.options.items():
            lines.append(
                f"|  * {option}: {spec.description or NO_OPTION_DESCRIPTION} "
                f"(default value = {render_default(spec.default)})"
            )
    return "\n".join(lines)


def print_help(
    registry: FilterRegistry,
    name: Optional[str] = None,
    console: Optional[Console] = None,
) -> str:
    """Print help for the named filter to console (stdout by default)."""
    text = describe(registry, name)
    descriptor = registry.lookup(name)  # type: ignore[arg-type]
    console = console or Console()

    if descriptor.options:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Option", style="cyan")
        table.add_column("Description")
        table.add_column("Default", style="green")
        for option, spec in descriptor.options.items():
            table.add_row(option, spec.description or NO_OPTION_DESCRIPTION, render_default(spec.default))
        body: Any = table
    else:
        body = NO_OPTIONS

    console.print(
        Panel(
            body,
            title=f"[bold]{name}[/bold]",
            subtitle=descriptor.description or NO_DESCRIPTION,
        )
    )
    return text
