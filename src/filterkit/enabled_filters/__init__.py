"""Filters bundled with filterkit, registered by the default loader."""

from filterkit.enabled_filters import string

FILTERS = {
    "string": string,
}

__all__ = ["FILTERS"]
