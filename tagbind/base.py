"""
Key-driven field binder.
Finds the field tagged with a key, applies environment overrides, converts the
raw string to the field's type, assigns it in place and validates it.
"""

import dataclasses
import logging
from datetime import timedelta
from typing import Any, Mapping, Optional

from tagbind.descriptors import FieldDescriptor, FieldKind, descriptor_index, descriptors
from tagbind.environment import resolve_value
from tagbind.errors import (
    ConfigValidationError,
    FieldNotFoundError,
    NotAddressableError,
    TagBindError,
    ValidationError,
)

LOG = logging.getLogger(__name__)


def _settings_type(target: Any) -> Optional[type]:
    cls = target if isinstance(target, type) else type(target)
    return cls if dataclasses.is_dataclass(cls) else None


def _require_addressable(target: Any) -> None:
    """Mutating operations need a live, unfrozen dataclass instance."""
    if isinstance(target, type):
        raise NotAddressableError(f"an instance is required, got the class {target.__name__}")
    if not dataclasses.is_dataclass(target):
        raise NotAddressableError(f"a dataclass instance is required, got {type(target).__name__}")
    if type(target).__dataclass_params__.frozen:
        raise NotAddressableError(f"{type(target).__name__} is frozen and cannot be assigned to")


def field_with_key(target: Any, key: str) -> FieldDescriptor:
    """Descriptor of the field on target (instance or type) declaring key."""
    cls = _settings_type(target)
    if cls is None:
        raise FieldNotFoundError(key)
    desc = descriptor_index(cls).get(key)
    if desc is None:
        raise FieldNotFoundError(key)
    return desc


def _validate_one(target: Any, desc: FieldDescriptor) -> None:
    if desc.check is None:
        return
    message = desc.check(desc.get(target))
    if message is not None:
        raise ValidationError(desc.name, desc.rule, message)


def validate_field(target: Any, name: str) -> None:
    """
    Run the validation rule declared on one field, by attribute name.
    Raises ValidationError if the current value breaks it, FieldNotFoundError
    if no keyed field has that name. Keyed fields without a rule always pass.
    """
    if isinstance(target, type) or _settings_type(target) is None:
        raise NotAddressableError(f"a dataclass instance is required, got {target!r}")

    for desc in descriptors(type(target)):
        if desc.name == name:
            _validate_one(target, desc)
            return
    raise FieldNotFoundError(name)


def validate(target: Any) -> None:
    """Validate every keyed field, raising ConfigValidationError listing all failures."""
    if isinstance(target, type) or _settings_type(target) is None:
        raise NotAddressableError(f"a dataclass instance is required, got {target!r}")

    errors: list[tuple[str, str]] = []
    for desc in descriptors(type(target)):
        if desc.check is None:
            continue
        message = desc.check(desc.get(target))
        if message is not None:
            errors.append((desc.name, f"{desc.rule}: {message}"))

    if errors:
        raise ConfigValidationError(errors)


def set_field_with_key(
    target: Any,
    key: str,
    value: Any,
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Assign value to the field of target tagged with key.

    - value: raw value, converted with str() if it is not already a string
    - env: mapping to read environment overrides from (default: os.environ)
    - Raises NotAddressableError, FieldNotFoundError, ConversionError, or the
      ValidationError of the field's rule (the assignment is kept in that case)
    """
    _require_addressable(target)
    desc = field_with_key(target, key)

    raw = resolve_value(desc, value if isinstance(value, str) else str(value), env)
    desc.assign(target, desc.parse(target, raw))
    _validate_one(target, desc)


def set_defaults(target: Any, env: Optional[Mapping[str, str]] = None) -> None:
    """
    Apply the Default of every keyed field, in declaration order.
    Stops at the first error; fields set before it keep their new values.
    """
    _require_addressable(target)

    for desc in descriptors(type(target)):
        if not desc.default:
            continue
        LOG.debug("applying default for key '%s'", desc.key)
        set_field_with_key(target, desc.key, desc.default, env)


def _value_of_kind(target: Any, key: str, kind: FieldKind, expected: type) -> Any:
    try:
        desc = field_with_key(target, key)
    except TagBindError:
        return None
    if desc.kind is not kind or isinstance(target, type):
        return None
    value = desc.get(target)
    return value if isinstance(value, expected) else None


def string_with_key(target: Any, key: str) -> str:
    """String field tagged with key, "" when not found."""
    value = _value_of_kind(target, key, FieldKind.STRING, str)
    return value if value is not None else ""


def string_list_with_key(target: Any, key: str) -> list[str]:
    """Copy of the list field tagged with key, empty when not found."""
    value = _value_of_kind(target, key, FieldKind.STRING_LIST, list)
    return list(value) if value is not None else []


def bool_with_key(target: Any, key: str) -> bool:
    """Bool field tagged with key, False when not found."""
    value = _value_of_kind(target, key, FieldKind.BOOL, bool)
    return value if value is not None else False


def int_with_key(target: Any, key: str) -> int:
    """Integer field tagged with key, 0 when not found."""
    value = _value_of_kind(target, key, FieldKind.INT, int)
    return value if value is not None else 0


def duration_with_key(target: Any, key: str) -> timedelta:
    """Duration field tagged with key, timedelta(0) when not found."""
    value = _value_of_kind(target, key, FieldKind.DURATION, timedelta)
    return value if value is not None else timedelta(0)
