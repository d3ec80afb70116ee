"""
Error taxonomy for filterkit.

Registration, lookup, and option errors are raised by the core; ValidationFailure
is the conventional exception for filter bodies to raise when a value is rejected.
"""

from __future__ import annotations

from typing import Iterable, Optional


class FilterError(Exception):
    """Base class for all filterkit errors."""


class InvalidFilterError(FilterError):
    """A registration input is structurally invalid (e.g. no validate operation)."""


class UnknownFilterError(FilterError):
    """Lookup by name found no registered filter."""

    def __init__(self, name: str, known: Iterable[str]) -> None:
        self.name = name
        self.known = list(known)
        super().__init__(
            f"Invalid filter {name!r}. Choose one of: {', '.join(self.known) or '(none registered)'}"
        )


class UnknownOptionError(FilterError):
    """Caller passed an option not declared by the filter's option schema."""

    def __init__(self, option: str, filter_name: Optional[str] = None) -> None:
        self.option = option
        self.filter_name = filter_name
        super().__init__(f"Unknown option {option!r} for filter {filter_name or '<anonymous>'!r}")


class MissingArgumentError(FilterError):
    """A required call argument was omitted."""


class DeferredModeError(FilterError):
    """Deferred dispatch was requested outside of a running event loop."""


class ValidationFailure(FilterError):
    """Raised by filter bodies when a value is rejected."""
