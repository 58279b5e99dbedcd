"""tagbind: bind keyed, tagged dataclass fields from raw strings, defaults and the environment."""

from tagbind.base import (
    bool_with_key,
    duration_with_key,
    field_with_key,
    int_with_key,
    set_defaults,
    set_field_with_key,
    string_list_with_key,
    string_with_key,
    validate,
    validate_field,
)
from tagbind.descriptors import FieldDescriptor, FieldKind, descriptors
from tagbind.environment import load_environment, resolve_value
from tagbind.errors import (
    ConfigValidationError,
    ConversionError,
    DescriptorError,
    FieldNotFoundError,
    NotAddressableError,
    TagBindError,
    ValidationError,
)
from tagbind.tags import ConversionMode, Default, Env, Key, Mode, Validate

__all__ = [
    "set_field_with_key",
    "set_defaults",
    "field_with_key",
    "resolve_value",
    "load_environment",
    "string_with_key",
    "string_list_with_key",
    "bool_with_key",
    "int_with_key",
    "duration_with_key",
    "validate",
    "validate_field",
    "descriptors",
    "FieldDescriptor",
    "FieldKind",
    "ConversionMode",
    "Key",
    "Default",
    "Env",
    "Mode",
    "Validate",
    "TagBindError",
    "NotAddressableError",
    "FieldNotFoundError",
    "ConversionError",
    "ValidationError",
    "ConfigValidationError",
    "DescriptorError",
]
