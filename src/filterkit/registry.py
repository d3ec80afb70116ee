"""Filter registry: name -> FilterDescriptor."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping

import structlog

from filterkit.errors import MissingArgumentError, UnknownFilterError
from filterkit.models import FilterDescriptor
from filterkit.registration import normalize

logger = structlog.get_logger(__name__)


class FilterRegistry:
    """
    Mutable catalog of named filters.

    Registration is expected at startup or under external synchronization;
    validate/sanitize/help never mutate the registry.
    """

    def __init__(self) -> None:
        self._filters: Dict[str, FilterDescriptor] = {}

    def add(self, name: str, filter: Any, options: Any = None) -> bool:
        """
        Register a filter under name. Returns True if the name was new,
        False if an existing filter was overwritten.
        """
        if not isinstance(name, str) or not name:
            raise MissingArgumentError("Filter name must be a non-empty string")

        descriptor = normalize(filter, options)
        overwritten = name in self._filters
        self._filters[name] = descriptor

        if overwritten:
            logger.warning("filter_overwritten", name=name)
        else:
            logger.debug("filter_registered", name=name, options=list(descriptor.options))
        return not overwritten

    def add_many(self, filters: Mapping[str, Any]) -> Dict[str, bool]:
        """Bulk registration. Entries that fail to normalize are logged and skipped."""
        results: Dict[str, bool] = {}
        for name, filter in filters.items():
            try:
                results[name] = self.add(name, filter)
            except Exception as e:
                # Module references run arbitrary top-level code
                logger.warning("filter_load_failed", name=name, error=str(e), error_type=type(e).__name__)
        return results

    def list(self) -> List[str]:
        return list(self._filters)

    def lookup(self, name: str) -> FilterDescriptor:
        try:
            return self._filters[name]
        except KeyError:
            raise UnknownFilterError(name, self._filters) from None

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[str]:
        return iter(self._filters)
