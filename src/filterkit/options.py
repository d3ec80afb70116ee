"""Option resolution: defaults plus whitelisted caller overrides."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from filterkit.errors import UnknownOptionError
from filterkit.models import FilterDescriptor


def resolve_options(
    descriptor: FilterDescriptor,
    overrides: Optional[Mapping[str, Any]] = None,
    filter_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the complete options dict for a call.

    Every declared option is present; an override wins over the schema default
    even when the override is None. Undeclared overrides are rejected.
    """
    overrides = dict(overrides or {})
    for key in overrides:
        if key not in descriptor.options:
            raise UnknownOptionError(key, filter_name)

    return {
        name: overrides[name] if name in overrides else spec.default
        for name, spec in descriptor.options.items()
    }
