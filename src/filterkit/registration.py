"""
Registration inputs and their normalization into FilterDescriptor.

A filter may be registered as a bare validate callable, as a module reference
string, or as a descriptor object (FilterDescriptor, mapping, or any object such
as a module exposing validate/sanitize/options/description). The shape is
inspected once, here; dispatch only ever sees FilterDescriptor.

Option-merge policy: a descriptor that declares its own options keeps them
unchanged; otherwise it adopts the externally supplied schema as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from filterkit.errors import InvalidFilterError
from filterkit.models import FilterDescriptor, ValidateFn, normalize_option_schema

# Legacy descriptor key accepted in place of "validate"
_LEGACY_VALIDATE_KEY = "callback"


@dataclass(frozen=True)
class FromCallback:
    validate: ValidateFn
    options: Any = None


@dataclass(frozen=True)
class FromModuleReference:
    reference: str
    options: Any = None


@dataclass(frozen=True)
class FromDescriptor:
    source: Any
    options: Any = None


RegistrationInput = Union[FromCallback, FromModuleReference, FromDescriptor]


def as_registration(filter: Any, options: Any = None) -> RegistrationInput:
    """Classify a raw registration input into one of the three variants."""
    if isinstance(filter, (FromCallback, FromModuleReference, FromDescriptor)):
        return filter
    if isinstance(filter, FilterDescriptor) or isinstance(filter, Mapping):
        return FromDescriptor(filter, options)
    if isinstance(filter, str):
        return FromModuleReference(filter, options)
    # Functions and other plain callables; objects with a validate attribute
    # (modules, descriptor-like instances) are descriptors even if callable.
    if callable(filter) and not hasattr(filter, "validate"):
        return FromCallback(filter, options)
    return FromDescriptor(filter, options)


def normalize(filter: Any, options: Any = None) -> FilterDescriptor:
    """Resolve any registration input into a FilterDescriptor."""
    registration = as_registration(filter, options)

    if isinstance(registration, FromCallback):
        return FilterDescriptor(
            validate=registration.validate,
            options=normalize_option_schema(registration.options),
        )

    if isinstance(registration, FromModuleReference):
        from filterkit.loader import import_reference

        loaded = import_reference(registration.reference)
        return normalize(loaded, registration.options)

    return _from_descriptor(registration.source, registration.options)


def _from_descriptor(source: Any, external_options: Any) -> FilterDescriptor:
    if isinstance(source, FilterDescriptor):
        if source.options or external_options is None:
            return source
        return FilterDescriptor(
            validate=source.validate,
            sanitize=source.sanitize,
            options=normalize_option_schema(external_options),
            description=source.description,
        )

    validate = _field(source, "validate")
    if validate is None:
        validate = _field(source, _LEGACY_VALIDATE_KEY)
    if validate is None:
        raise InvalidFilterError("Invalid filter: required field 'validate'")

    own_options = _field(source, "options")
    return FilterDescriptor(
        validate=validate,
        sanitize=_field(source, "sanitize"),
        options=normalize_option_schema(own_options if own_options else external_options),
        description=_field(source, "description"),
    )


def _field(source: Any, name: str) -> Optional[Any]:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)
