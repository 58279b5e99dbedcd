"""
Validation rules declared with the Validate tag.

A rule string is either "name" or "name=argument". Rules are compiled once,
when a type's descriptor table is built, into a check function that returns
an error message or None.
"""

import ipaddress
import re
from typing import Any, Callable, Optional

from tagbind.convert import is_duration
from tagbind.errors import DescriptorError

Check = Callable[[Any], Optional[str]]

_SHELL_UNSAFE = set("`$;|&><")


def _each(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    if value in ("", None):
        return []
    return [value]


def _enum(arg: str) -> Check:
    allowed = [a.strip() for a in arg.split(",")]

    def check(value: Any) -> Optional[str]:
        for item in _each(value):
            if str(item) not in allowed:
                return f"'{item}' should be one of {', '.join(allowed)}"
        return None

    return check


def _shellsafe(arg: str) -> Check:
    def check(value: Any) -> Optional[str]:
        for item in _each(value):
            bad = sorted(_SHELL_UNSAFE.intersection(str(item)))
            if bad:
                return f"'{item}' contains shell unsafe characters {''.join(bad)}"
        return None

    return check


def _address(family: Optional[int]) -> Callable[[str], Check]:
    label = {4: "IPv4", 6: "IPv6", None: "IP"}[family]

    def factory(arg: str) -> Check:
        def check(value: Any) -> Optional[str]:
            for item in _each(value):
                try:
                    addr = ipaddress.ip_address(str(item))
                except ValueError:
                    return f"'{item}' is not a valid {label} address"
                if family is not None and addr.version != family:
                    return f"'{item}' is not a valid {label} address"
            return None

        return check

    return factory


def _regex(arg: str) -> Check:
    try:
        pattern = re.compile(arg)
    except re.error as e:
        raise DescriptorError(f"invalid regex rule '{arg}': {e}") from e

    def check(value: Any) -> Optional[str]:
        for item in _each(value):
            if not pattern.fullmatch(str(item)):
                return f"'{item}' does not match regular expression {arg}"
        return None

    return check


def _maxlength(arg: str) -> Check:
    try:
        limit = int(arg)
    except ValueError as e:
        raise DescriptorError(f"maxlength rule needs an integer, got '{arg}'") from e

    def check(value: Any) -> Optional[str]:
        if value is not None and len(value) > limit:
            return f"length {len(value)} exceeds maximum of {limit}"
        return None

    return check


def _duration(arg: str) -> Check:
    def check(value: Any) -> Optional[str]:
        for item in _each(value):
            if isinstance(item, str) and not is_duration(item):
                return f"'{item}' is not a valid duration"
        return None

    return check


RULES: dict[str, Callable[[str], Check]] = {
    "enum": _enum,
    "shellsafe": _shellsafe,
    "ipv4": _address(4),
    "ipv6": _address(6),
    "ipaddress": _address(None),
    "regex": _regex,
    "maxlength": _maxlength,
    "duration": _duration,
}


def compile_rule(rule: str) -> Check:
    """Turn a rule string into a check function, DescriptorError if unknown."""
    name, _, arg = rule.partition("=")
    factory = RULES.get(name.strip())
    if factory is None:
        raise DescriptorError(f"unknown validation rule '{rule}'")
    return factory(arg)
