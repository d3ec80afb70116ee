"""
Core data types: option specs, filter descriptors, and deferred-mode outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filterkit.errors import InvalidFilterError

ValidateFn = Callable[[Any, Dict[str, Any]], Any]
SanitizeFn = Callable[[Any, Dict[str, Any]], Any]


# -----------------------------------------------------------------------------
# Option schema
# -----------------------------------------------------------------------------


class OptionSpec(BaseModel):
    """One declared option of a filter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    description: Optional[str] = Field(default=None, description="Shown by help()")
    default: Any = Field(default=None, description="Value used when the caller gives no override")


OptionSchema = Dict[str, OptionSpec]


def normalize_option_schema(schema: Any) -> OptionSchema:
    """
    Turn a caller-supplied option schema into a dict of OptionSpec.

    Accepts None, a mapping of name -> OptionSpec, or name -> {"description", "default"}.
    A None spec for a single option is an option with no description and no default.
    """
    if schema is None:
        return {}
    if not isinstance(schema, Mapping):
        raise InvalidFilterError(f"Option schema must be a mapping, got {type(schema).__name__}")

    normalized: OptionSchema = {}
    for name, spec in schema.items():
        if not isinstance(name, str) or not name:
            raise InvalidFilterError(f"Option names must be non-empty strings, got {name!r}")
        if isinstance(spec, OptionSpec):
            normalized[name] = spec
        elif spec is None:
            normalized[name] = OptionSpec()
        elif isinstance(spec, Mapping):
            try:
                normalized[name] = OptionSpec.model_validate(dict(spec))
            except ValidationError as e:
                raise InvalidFilterError(f"Invalid spec for option {name!r}: {e}") from e
        else:
            raise InvalidFilterError(f"Invalid spec for option {name!r}: expected a mapping")
    return normalized


# -----------------------------------------------------------------------------
# Filter descriptor
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterDescriptor:
    """Canonical shape of a filter once registration inputs are normalized."""

    validate: ValidateFn
    sanitize: Optional[SanitizeFn] = None
    options: OptionSchema = field(default_factory=dict)
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not callable(self.validate):
            raise InvalidFilterError("Invalid filter: 'validate' must be callable")
        if self.sanitize is not None and not callable(self.sanitize):
            raise InvalidFilterError("Invalid filter: 'sanitize' must be callable")


# -----------------------------------------------------------------------------
# Outcome of a deferred call
# -----------------------------------------------------------------------------


class FilterOutcome(BaseModel):
    """Result of a deferred validate/sanitize call."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    operation: Literal["validate", "sanitize"]
    status: Literal["pass", "fail"]
    original: Any = Field(default=None, description="Value passed in by the caller")
    value: Any = Field(default=None, description="Validated or sanitized value; None on failure")
    error: Optional[BaseException] = Field(default=None, description="Failure raised during the call")

    def is_ok(self) -> bool:
        return self.status == "pass"

    def unwrap(self) -> Any:
        """Return the value, or re-raise the captured failure."""
        if self.error is not None:
            raise self.error
        return self.value
