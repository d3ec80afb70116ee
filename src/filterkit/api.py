"""
Process-wide default registry and the module-level API bound to it.

The default registry is created lazily on first use and populated with
load_default_filters(). Applications that need isolation should build their
own FilterRegistry and Dispatcher instead.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from rich.console import Console

from filterkit.dispatcher import Callback, Dispatcher
from filterkit.introspection import print_help
from filterkit.loader import load_default_filters
from filterkit.models import FilterOutcome
from filterkit.registry import FilterRegistry

_registry: Optional[FilterRegistry] = None
_dispatcher: Optional[Dispatcher] = None


def get_registry() -> FilterRegistry:
    """Get or create the default registry (runs filter discovery once)."""
    global _registry, _dispatcher
    if _registry is None:
        registry = FilterRegistry()
        load_default_filters(registry)
        _registry = registry
        _dispatcher = Dispatcher(registry)
    return _registry


def get_dispatcher() -> Dispatcher:
    get_registry()
    assert _dispatcher is not None
    return _dispatcher


def reset_default_registry() -> None:
    """Drop the default registry; the next call rediscovers filters."""
    global _registry, _dispatcher
    _registry = None
    _dispatcher = None


def add(name: str, filter: Any, options: Any = None) -> bool:
    return get_registry().add(name, filter, options)


def list_filters() -> List[str]:
    return get_registry().list()


def help(name: Optional[str] = None, console: Optional[Console] = None) -> str:
    return print_help(get_registry(), name, console=console)


def validate(
    value: Any,
    filter: Any,
    options: Optional[Mapping[str, Any]] = None,
    callback: Optional[Callback] = None,
) -> Any:
    return get_dispatcher().validate(value, filter, options, callback)


def sanitize(
    value: Any,
    filter: Any,
    options: Optional[Mapping[str, Any]] = None,
    callback: Optional[Callback] = None,
) -> Any:
    return get_dispatcher().sanitize(value, filter, options, callback)


async def avalidate(value: Any, filter: Any, options: Optional[Mapping[str, Any]] = None) -> FilterOutcome:
    return await get_dispatcher().avalidate(value, filter, options)


async def asanitize(value: Any, filter: Any, options: Optional[Mapping[str, Any]] = None) -> FilterOutcome:
    return await get_dispatcher().asanitize(value, filter, options)


# Same name as FilterRegistry.list
list = list_filters  # noqa: A001

__all__ = [
    "add",
    "asanitize",
    "avalidate",
    "get_dispatcher",
    "get_registry",
    "help",
    "list",
    "list_filters",
    "reset_default_registry",
    "sanitize",
    "validate",
]

