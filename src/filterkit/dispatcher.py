"""
Validate/sanitize dispatch in immediate and deferred mode.

Immediate mode (no callback) runs the filter in the caller's frame and raises
on failure. Deferred mode (callback given) schedules the whole call, option
resolution included, on the running asyncio event loop with call_soon; every
failure is delivered through the callback and the returned future, never
raised across the scheduling boundary.

Deferred calls issued in one synchronous turn run in the order they were
issued. There is no cancellation: once scheduled, a call runs to completion.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import structlog

from filterkit.errors import DeferredModeError
from filterkit.models import FilterDescriptor, FilterOutcome
from filterkit.options import resolve_options
from filterkit.registration import normalize
from filterkit.registry import FilterRegistry

logger = structlog.get_logger(__name__)

Overrides = Optional[Mapping[str, Any]]
Callback = Callable[..., Any]


class Dispatcher:
    """Public validate/sanitize entry points bound to one registry."""

    def __init__(self, registry: FilterRegistry) -> None:
        self.registry = registry

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, filter: Any) -> Tuple[Optional[str], FilterDescriptor]:
        """
        Return (name, descriptor) for a filter name or an ad hoc filter.

        Strings are looked up in the registry; any other registration input
        (FilterDescriptor, mapping, callable) is normalized without registering it.
        """
        if isinstance(filter, str):
            return filter, self.registry.lookup(filter)
        return None, normalize(filter)

    def prepare(self, filter: Any, options: Overrides = None) -> Tuple[FilterDescriptor, Dict[str, Any]]:
        name, descriptor = self.resolve(filter)
        return descriptor, resolve_options(descriptor, options, name)

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    def validate(
        self,
        value: Any,
        filter: Any,
        options: Overrides = None,
        callback: Optional[Callback] = None,
    ) -> Optional["asyncio.Future[FilterOutcome]"]:
        """
        Validate value with filter.

        Without callback, returns None or raises. With callback, returns a future
        and later calls callback(error, value); error is None on success.
        Callback mode must be called from inside a running event loop,
        otherwise DeferredModeError is raised and nothing is scheduled.
        """
        if callback is not None:
            return self._schedule("validate", value, filter, options, callback)
        self._run_validate(value, filter, options)
        return None

    def sanitize(
        self,
        value: Any,
        filter: Any,
        options: Overrides = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """
        Sanitize value with filter.

        Without callback, returns the sanitized value or raises. With callback,
        returns a future and later calls callback(error, sanitized, original);
        sanitized is None on failure.
        Callback mode must be called from inside a running event loop,
        otherwise DeferredModeError is raised and nothing is scheduled.
        """
        if callback is not None:
            return self._schedule("sanitize", value, filter, options, callback)
        return self._run_sanitize(value, filter, options)

    async def avalidate(self, value: Any, filter: Any, options: Overrides = None) -> FilterOutcome:
        """Deferred validate as a coroutine; returns the outcome instead of raising."""
        return await self._schedule("validate", value, filter, options, None)

    async def asanitize(self, value: Any, filter: Any, options: Overrides = None) -> FilterOutcome:
        """Deferred sanitize as a coroutine; returns the outcome instead of raising."""
        return await self._schedule("sanitize", value, filter, options, None)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _run_validate(self, value: Any, filter: Any, options: Overrides) -> Any:
        descriptor, resolved = self.prepare(filter, options)
        descriptor.validate(value, resolved)
        return value

    def _run_sanitize(self, value: Any, filter: Any, options: Overrides) -> Any:
        descriptor, resolved = self.prepare(filter, options)
        if descriptor.sanitize is None:
            descriptor.validate(value, resolved)
            return value
        return descriptor.sanitize(value, resolved)

    def _schedule(
        self,
        operation: str,
        value: Any,
        filter: Any,
        options: Overrides,
        callback: Optional[Callback],
    ) -> "asyncio.Future[FilterOutcome]":
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise DeferredModeError("Deferred mode requires a running asyncio event loop") from e

        future: asyncio.Future[FilterOutcome] = loop.create_future()
        loop.call_soon(self._run_deferred, future, operation, value, filter, options, callback)
        return future

    def _run_deferred(
        self,
        future: "asyncio.Future[FilterOutcome]",
        operation: str,
        value: Any,
        filter: Any,
        options: Overrides,
        callback: Optional[Callback],
    ) -> None:
        run = self._run_validate if operation == "validate" else self._run_sanitize
        try:
            result = run(value, filter, options)
        except Exception as e:
            outcome = FilterOutcome(operation=operation, status="fail", original=value, error=e)
        else:
            outcome = FilterOutcome(operation=operation, status="pass", original=value, value=result)

        if not future.done():
            future.set_result(outcome)

        if callback is None:
            return
        try:
            if operation == "validate":
                callback(outcome.error, value)
            else:
                callback(outcome.error, outcome.value, value)
        except Exception:
            logger.exception("deferred_callback_failed", operation=operation)
