"""
String-to-value converters used by the binder.

Each converter takes the raw string and the field's current value and returns
the new value. Nothing here touches the target, so a failed parse never leaves
a field half written.
"""

import os
import re
from datetime import timedelta
from decimal import Decimal
from typing import Any

from tagbind.errors import ConversionError

TRUE_WORDS = frozenset({"1", "yes", "true", "y", "t"})
FALSE_WORDS = frozenset({"0", "no", "false", "n", "f"})

_INTEGER = re.compile(r"[+-]?[0-9]+")
_SECONDS = re.compile(r"[0-9]+")
_DURATION_TERM = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")

# nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def _current_list(current: Any) -> list[str]:
    return list(current) if current else []


def _split(raw: str, sep: str) -> list[str]:
    return [part.strip() for part in raw.split(sep)]


def comma_split(raw: str, current: Any = None) -> list[str]:
    """Replace the list with the comma separated parts of raw."""
    return _split(raw, ",")


def colon_split(raw: str, current: Any = None) -> list[str]:
    """Append the ':' separated parts of raw, whatever the host path separator."""
    return _current_list(current) + _split(raw, ":")


def path_split(raw: str, current: Any = None) -> list[str]:
    """Append the parts of raw split on the host's path list separator."""
    return _current_list(current) + _split(raw, os.pathsep)


def append_one(raw: str, current: Any = None) -> list[str]:
    return _current_list(current) + [raw.strip()]


def verbatim(raw: str, current: Any = None) -> str:
    return raw


def title_string(raw: str, current: Any = None) -> str:
    return raw[:1].upper() + raw[1:]


def parse_int(raw: str, current: Any = None) -> int:
    """Parse a base-10 integer with an optional sign."""
    if not _INTEGER.fullmatch(raw):
        raise ConversionError(f"cannot convert string value '{raw}' into an integer")
    try:
        return int(raw)
    except ValueError as e:
        # digit strings past the interpreter's int conversion limit
        raise ConversionError(f"integer value '{raw[:20]}...' is out of range") from e


def parse_bool(raw: str, current: Any = None) -> bool:
    """
    Convert a typical boolean-ish string to bool.

    1, yes, true, y, t are True; 0, no, false, n, f are False, compared
    case-insensitively after stripping whitespace. Anything else is an error.
    """
    clean = raw.strip()
    word = clean.lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ConversionError(f"cannot convert string value '{clean}' into a boolean")


def parse_duration(raw: str, current: Any = None) -> timedelta:
    """
    Parse a duration.

    A string of digits only is a number of seconds. Anything else must be a
    signed sequence of decimal numbers with unit suffixes such as "300ms",
    "1.5h" or "2h45m". Precision is truncated to microseconds.
    """
    try:
        return _duration(raw)
    except ConversionError:
        raise
    except (ValueError, ArithmeticError) as e:
        raise ConversionError(f"duration '{raw[:40]}' is out of range") from e


def _duration(raw: str) -> timedelta:
    if _SECONDS.fullmatch(raw):
        return timedelta(seconds=int(raw))

    body = raw
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    if body == "0":
        return timedelta(0)
    if not body:
        raise ConversionError(f"invalid duration '{raw}'")

    nanos = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_TERM.match(body, pos)
        if match is None:
            raise ConversionError(f"invalid duration '{raw}'")
        number, unit = match.groups()
        nanos += Decimal(number) * _UNITS[unit]
        pos = match.end()

    micros = int(nanos) // 1000
    return timedelta(microseconds=-micros if negative else micros)


def is_duration(raw: str) -> bool:
    try:
        parse_duration(raw)
    except ConversionError:
        return False
    return True
