"""
Tag types for settings schema definitions.
Used inside Annotated[type, ...] (or as field metadata values) to declare the
binding key, default, environment override, conversion mode and validation rule.
"""

from enum import Enum

from tagbind.errors import DescriptorError


class ConversionMode(Enum):
    """How a raw string becomes a typed value beyond the type's default parse."""

    COMMA_SPLIT = "comma_split"
    COLON_SPLIT = "colon_split"
    PATH_SPLIT = "path_split"
    DURATION = "duration"
    TITLE_STRING = "title_string"


class Key:
    """Symbolic name the field is bound to, independent of the attribute name."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("Key name must be a non-empty string")
        self.name = name

    def __repr__(self) -> str:
        return f"Key({self.name!r})"


class Default:
    """Default raw string applied by the defaults pass."""

    def __init__(self, value: str):
        self.value = value

    def __repr__(self) -> str:
        return f"Default({self.value!r})"


class Env:
    """Environment variable that overrides any raw value set for the field."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Env({self.name!r})"


class Mode:
    """Conversion mode, given as a ConversionMode or its string value."""

    def __init__(self, mode: "ConversionMode | str"):
        try:
            self.mode = ConversionMode(mode)
        except ValueError as e:
            known = ", ".join(m.value for m in ConversionMode)
            raise DescriptorError(f"unknown conversion mode '{mode}' (expected one of {known})") from e

    def __repr__(self) -> str:
        return f"Mode({self.mode.value!r})"


class Validate:
    """Validation rule string, e.g. "enum=debug,info,warn" or "ipv4"."""

    def __init__(self, rule: str):
        self.rule = rule

    def __repr__(self) -> str:
        return f"Validate({self.rule!r})"
