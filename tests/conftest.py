"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import structlog

from filterkit import api
from filterkit.config import settings as settings_module
from filterkit.dispatcher import Dispatcher
from filterkit.loader import load_filters_from_directory
from filterkit.registry import FilterRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_filters_dir() -> Path:
    """Directory holding the arithmetic (add) and even filter modules."""
    return FIXTURES_DIR / "enabled_filters"


@pytest.fixture
def registry() -> FilterRegistry:
    """Fresh, empty registry."""
    return FilterRegistry()


@pytest.fixture
def loaded_registry(fixture_filters_dir: Path) -> FilterRegistry:
    """Registry populated from the fixture filter directory."""
    registry = FilterRegistry()
    load_filters_from_directory(registry, fixture_filters_dir)
    return registry


@pytest.fixture
def dispatcher(loaded_registry: FilterRegistry) -> Dispatcher:
    return Dispatcher(loaded_registry)


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Reset the default registry, settings, and logging; run from an empty cwd."""
    monkeypatch.chdir(tmp_path)
    settings_module._settings = None
    api.reset_default_registry()
    yield
    settings_module._settings = None
    api.reset_default_registry()
    structlog.reset_defaults()
