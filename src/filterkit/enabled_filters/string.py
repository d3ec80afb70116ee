"""Standard string validations: length bounds and pattern matching."""

from __future__ import annotations

import re
from typing import Any, Dict

from filterkit.errors import ValidationFailure

description = "Standard string validations"

options = {
    "min": {"description": "Minimum length", "default": 0},
    "max": {"description": "Maximum length"},
    "pattern": {"description": "Regexp that should be matched"},
    "replace": {"description": "Replacement for given pattern, used for sanitization only"},
}


def validate(value: Any, options: Dict[str, Any]) -> None:
    if not isinstance(value, str):
        raise ValidationFailure("String expected")
    if options["min"] is not None and len(value) < options["min"]:
        raise ValidationFailure(f"String should be at least {options['min']} characters long")
    if options["max"] is not None and len(value) > options["max"]:
        raise ValidationFailure(f"String should be at most {options['max']} characters long")
    if options["pattern"] is not None and not re.search(options["pattern"], value):
        raise ValidationFailure(f"String should match pattern {options['pattern']}")


def sanitize(value: Any, options: Dict[str, Any]) -> str:
    if not isinstance(value, str):
        raise ValidationFailure("String expected")
    # Every match is replaced, not only the first
    if options["pattern"] is not None and options["replace"] is not None:
        value = re.sub(options["pattern"], options["replace"], value)
    if options["min"] is not None:
        value = value.ljust(options["min"])
    if options["max"] is not None:
        value = value[: options["max"]]
    return value
