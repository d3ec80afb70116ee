"""Unit tests for FilterRegistry: add/list/lookup and overwrite reporting."""

import pytest

from filterkit.errors import InvalidFilterError, MissingArgumentError, UnknownFilterError
from filterkit.models import FilterDescriptor
from filterkit.registry import FilterRegistry


def _noop(value, options):
    return None


# -----------------------------------------------------------------------------
# add
# -----------------------------------------------------------------------------


def test_add_returns_true_on_first_registration(registry: FilterRegistry) -> None:
    assert registry.add("noop", _noop) is True
    assert "noop" in registry


def test_add_returns_false_on_every_overwrite(registry: FilterRegistry) -> None:
    registry.add("noop", _noop)
    assert registry.add("noop", _noop) is False
    assert registry.add("noop", {"validate": _noop}) is False
    assert len(registry) == 1


def test_overwrite_replaces_descriptor(registry: FilterRegistry) -> None:
    registry.add("f", {"validate": _noop, "description": "first"})
    registry.add("f", {"validate": _noop, "description": "second"})
    assert registry.lookup("f").description == "second"


def test_add_descriptor_without_validate_fails(registry: FilterRegistry) -> None:
    with pytest.raises(InvalidFilterError, match="validate"):
        registry.add("broken", {"sanitize": lambda v, o: v})
    assert "broken" not in registry


@pytest.mark.parametrize("name", ["", None])
def test_add_requires_name(registry: FilterRegistry, name) -> None:
    with pytest.raises(MissingArgumentError):
        registry.add(name, _noop)


def test_add_many_skips_invalid_entries(registry: FilterRegistry) -> None:
    results = registry.add_many({"ok": _noop, "bad": {"description": "no validate"}})
    assert results == {"ok": True}
    assert registry.list() == ["ok"]


# -----------------------------------------------------------------------------
# list / lookup
# -----------------------------------------------------------------------------


def test_list_keeps_insertion_order(registry: FilterRegistry) -> None:
    for name in ("b", "a", "c"):
        registry.add(name, _noop)
    assert registry.list() == ["b", "a", "c"]
    assert list(registry) == ["b", "a", "c"]


def test_lookup_returns_descriptor(registry: FilterRegistry) -> None:
    registry.add("noop", _noop)
    descriptor = registry.lookup("noop")
    assert isinstance(descriptor, FilterDescriptor)
    assert descriptor.validate is _noop


def test_lookup_unknown_lists_known_names(registry: FilterRegistry) -> None:
    registry.add("alpha", _noop)
    registry.add("beta", _noop)
    with pytest.raises(UnknownFilterError) as exc_info:
        registry.lookup("gamma")
    assert exc_info.value.known == ["alpha", "beta"]
    assert "alpha" in str(exc_info.value) and "beta" in str(exc_info.value)
