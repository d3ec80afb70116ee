"""
filterkit: a pluggable validation/sanitization registry.

Filters are named validate/sanitize pairs with declared options. Register them
with add() (or drop modules in an enabled_filters directory), then call
validate()/sanitize() by name with option overrides.
"""

from filterkit.api import (
    add,
    asanitize,
    avalidate,
    get_dispatcher,
    get_registry,
    help,
    list_filters,
    reset_default_registry,
    sanitize,
    validate,
)
from filterkit.dispatcher import Dispatcher
from filterkit.errors import (
    DeferredModeError,
    FilterError,
    InvalidFilterError,
    MissingArgumentError,
    UnknownFilterError,
    UnknownOptionError,
    ValidationFailure,
)
from filterkit.models import FilterDescriptor, FilterOutcome, OptionSpec
from filterkit.registry import FilterRegistry

__all__ = [
    "DeferredModeError",
    "Dispatcher",
    "FilterDescriptor",
    "FilterError",
    "FilterOutcome",
    "FilterRegistry",
    "InvalidFilterError",
    "MissingArgumentError",
    "OptionSpec",
    "UnknownFilterError",
    "UnknownOptionError",
    "ValidationFailure",
    "add",
    "asanitize",
    "avalidate",
    "get_dispatcher",
    "get_registry",
    "help",
    "list_filters",
    "reset_default_registry",
    "sanitize",
    "validate",
]
