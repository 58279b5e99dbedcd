"""
Exception types raised by tagbind.

Every error derives from TagBindError so callers can catch the whole family,
and most also derive from the closest builtin so generic handlers still work.
"""


class TagBindError(Exception):
    """Base class for all tagbind errors."""


class NotAddressableError(TagBindError, TypeError):
    """Raised when a mutating operation gets something other than a mutable dataclass instance."""


class FieldNotFoundError(TagBindError, LookupError):
    """Raised when no field is declared with the requested key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"can't find any field configured with key '{key}'")


class ConversionError(TagBindError, ValueError):
    """Raised when a raw string cannot be parsed into the field's type."""


class ValidationError(TagBindError, ValueError):
    """Raised when a field's declared validation rule rejects its value."""

    def __init__(self, field: str, rule: str, message: str):
        self.field = field
        self.rule = rule
        super().__init__(f"{field}: {message}")


class ConfigValidationError(TagBindError):
    """Raised by validate() with every failing field of a target."""

    def __init__(self, errors: list[tuple[str, str]]):
        self.errors = errors
        lines = [f"  {field}: {msg}" for field, msg in errors]
        super().__init__("Config validation failed:\n" + "\n".join(lines))


class DescriptorError(TagBindError, TypeError):
    """Raised when a settings type declares its tags inconsistently."""
