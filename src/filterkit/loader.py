"""
Filter discovery.

Loads filter modules from packages and directories into a registry at startup.
A module either exports a FILTERS mapping (bulk registration) or is itself a
single filter named after its file. Load failures are logged and skipped so
that one broken module never prevents the rest from loading.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import structlog

if TYPE_CHECKING:
    from filterkit.config.settings import Settings
    from filterkit.registry import FilterRegistry

logger = structlog.get_logger(__name__)

BUILTIN_PACKAGE = "filterkit.enabled_filters"
BULK_EXPORT = "FILTERS"


# -----------------------------------------------------------------------------
# Module references
# -----------------------------------------------------------------------------


def import_reference(reference: str) -> Any:
    """
    Resolve a module reference.

    "pkg.module" imports a module, "pkg.module:attr" returns an attribute of it,
    and a path ending in ".py" loads that file.
    """
    if reference.endswith(".py"):
        return _import_file(Path(reference))

    module_name, _, attr = reference.partition(":")
    module = importlib.import_module(module_name)
    if not attr:
        return module
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ImportError(f"Module {module_name!r} has no attribute {attr!r}") from None


def _import_file(path: Path) -> ModuleType:
    path = path.resolve()
    if not path.is_file():
        raise ImportError(f"Filter module not found: {path}")
    module_name = f"filterkit_discovered.{path.parent.name}.{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load filter module: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


# -----------------------------------------------------------------------------
# Discovery
# -----------------------------------------------------------------------------


def _register_module(registry: "FilterRegistry", module: Any, default_name: str) -> List[str]:
    bulk = getattr(module, BULK_EXPORT, None)
    if bulk is not None:
        if not isinstance(bulk, Mapping):
            logger.warning("filter_module_invalid", module=default_name, reason=f"{BULK_EXPORT} is not a mapping")
            return []
        return list(registry.add_many(bulk))

    try:
        registry.add(default_name, module)
    except Exception as e:
        logger.warning("filter_load_failed", name=default_name, error=str(e), error_type=type(e).__name__)
        return []
    return [default_name]


def load_filters_from_directory(registry: "FilterRegistry", path: str | Path) -> List[str]:
    """Register every filter module found in a directory. Returns the names loaded."""
    directory = Path(path)
    if not directory.is_dir():
        logger.info("filter_directory_missing", path=str(directory))
        return []

    loaded: List[str] = []
    for file in sorted(directory.glob("*.py")):
        if file.name.startswith("_"):
            continue
        try:
            module = _import_file(file)
        except Exception as e:
            logger.warning("filter_load_failed", name=file.stem, path=str(file), error=str(e))
            continue
        loaded.extend(_register_module(registry, module, file.stem))
    return loaded


def load_filters_from_package(registry: "FilterRegistry", package: str) -> List[str]:
    """Import a package and register its FILTERS mapping. Returns the names loaded."""
    try:
        module = importlib.import_module(package)
    except Exception as e:
        logger.warning("filter_module_load_failed", module=package, error=str(e))
        return []

    bulk = getattr(module, BULK_EXPORT, None)
    if not isinstance(bulk, Mapping):
        logger.warning(
            "filter_module_invalid",
            module=package,
            reason=f'should export {BULK_EXPORT} = {{"filter_name": filter}}',
        )
        return []
    return list(registry.add_many(bulk))


def load_default_filters(registry: "FilterRegistry", settings: Optional["Settings"] = None) -> List[str]:
    """
    Populate a registry from the configured locations: the bundled filters,
    ./enabled_filters in the working directory, then any extra directories.
    """
    if settings is None:
        from filterkit.config.settings import get_settings

        settings = get_settings()
    loader_settings = settings.loader

    loaded: List[str] = []
    if loader_settings.load_builtin:
        loaded.extend(load_filters_from_package(registry, BUILTIN_PACKAGE))
    if loader_settings.scan_cwd:
        loaded.extend(load_filters_from_directory(registry, Path.cwd() / loader_settings.cwd_dirname))
    for extra in loader_settings.extra_dirs:
        loaded.extend(load_filters_from_directory(registry, extra))

    logger.debug("filters_loaded", count=len(loaded), names=loaded)
    return loaded
