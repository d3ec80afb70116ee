"""Shared utilities for filterkit."""

from filterkit.utils.logging import configure_logging

__all__ = ["configure_logging"]
