"""
Descriptor tables for tagged settings dataclasses.

A settings type is introspected once: each field carrying a Key tag becomes a
FieldDescriptor holding its tags, its native kind and the converter chosen
for that kind and conversion mode. Tables are cached per type.
"""

import dataclasses
import logging
import types
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Annotated, Any, Callable, Mapping, Optional, Union, get_args, get_origin, get_type_hints

from tagbind import convert
from tagbind.errors import DescriptorError
from tagbind.tags import ConversionMode, Default, Env, Key, Mode, Validate
from tagbind.validators import Check, compile_rule

LOG = logging.getLogger(__name__)

Converter = Callable[[str, Any], Any]


class FieldKind(Enum):
    """Native kinds a keyed field may have."""

    STRING_LIST = "string_list"
    INT = "int"
    DURATION = "duration"
    STRING = "string"
    BOOL = "bool"


_CONVERTERS: dict[tuple[FieldKind, Optional[ConversionMode]], Converter] = {
    (FieldKind.STRING_LIST, None): convert.append_one,
    (FieldKind.STRING_LIST, ConversionMode.COMMA_SPLIT): convert.comma_split,
    (FieldKind.STRING_LIST, ConversionMode.COLON_SPLIT): convert.colon_split,
    (FieldKind.STRING_LIST, ConversionMode.PATH_SPLIT): convert.path_split,
    (FieldKind.INT, None): convert.parse_int,
    (FieldKind.DURATION, None): convert.parse_duration,
    (FieldKind.DURATION, ConversionMode.DURATION): convert.parse_duration,
    (FieldKind.STRING, None): convert.verbatim,
    (FieldKind.STRING, ConversionMode.TITLE_STRING): convert.title_string,
    (FieldKind.BOOL, None): convert.parse_bool,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Everything the binder knows about one keyed field."""

    name: str
    key: str
    kind: FieldKind
    default: Optional[str] = None
    env: Optional[str] = None
    mode: Optional[ConversionMode] = None
    rule: Optional[str] = None
    converter: Converter = field(default=convert.verbatim, repr=False, compare=False)
    check: Optional[Check] = field(default=None, repr=False, compare=False)

    def get(self, target: Any) -> Any:
        return getattr(target, self.name)

    def parse(self, target: Any, raw: str) -> Any:
        """Parse raw against the field's current value without writing it."""
        return self.converter(raw, self.get(target))

    def assign(self, target: Any, value: Any) -> None:
        setattr(target, self.name, value)


def _unwrap_optional(hint: Any) -> Any:
    """Optional[T] and T | None become T."""
    if get_origin(hint) in (Union, types.UnionType):
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _kind_for(hint: Any) -> Optional[FieldKind]:
    hint = _unwrap_optional(hint)
    # bool first, it is a subclass of int
    if hint is bool:
        return FieldKind.BOOL
    if hint is int:
        return FieldKind.INT
    if hint is str:
        return FieldKind.STRING
    if hint is timedelta:
        return FieldKind.DURATION
    if get_origin(hint) is list and get_args(hint) == (str,):
        return FieldKind.STRING_LIST
    return None


def _split_annotated(hint: Any, metadata: list[Any]) -> tuple[Any, list[Any]]:
    """Support Annotated[X, Key(...), Default(...)] next to field(metadata=...)."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        return args[0], metadata + list(args[1:])
    return hint, metadata


def _tag(metadata: list[Any], tag_type: type) -> Any:
    for m in metadata:
        if isinstance(m, tag_type):
            return m
    return None


def _descriptor(f: dataclasses.Field, hint: Any) -> Optional[FieldDescriptor]:
    metadata = list(f.metadata.values()) if f.metadata else []
    hint, metadata = _split_annotated(hint, metadata)

    key = _tag(metadata, Key)
    if key is None:
        return None

    kind = _kind_for(hint)
    if kind is None:
        raise DescriptorError(f"field '{f.name}' (key '{key.name}') has unsupported type {hint!r}")

    mode_tag = _tag(metadata, Mode)
    mode = mode_tag.mode if mode_tag else None
    converter = _CONVERTERS.get((kind, mode))
    if converter is None:
        raise DescriptorError(
            f"field '{f.name}' (key '{key.name}'): mode '{mode.value}' does not apply to {kind.value} fields"
        )

    default = _tag(metadata, Default)
    env = _tag(metadata, Env)
    validate = _tag(metadata, Validate)

    return FieldDescriptor(
        name=f.name,
        key=key.name,
        kind=kind,
        default=None if default is None or default.value is None else str(default.value),
        env=env.name if env else None,
        mode=mode,
        rule=validate.rule if validate else None,
        converter=converter,
        check=compile_rule(validate.rule) if validate else None,
    )


@lru_cache(maxsize=None)
def descriptors(cls: type) -> tuple[FieldDescriptor, ...]:
    """
    Build the descriptor table of a settings dataclass, in field order.

    Raises DescriptorError when cls is not a dataclass, when two fields share
    a key, or when a keyed field has an unsupported type, mode or rule.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise DescriptorError(f"{cls!r} is not a dataclass type")

    hints = get_type_hints(cls, include_extras=True)
    table: list[FieldDescriptor] = []
    seen: dict[str, str] = {}

    for f in dataclasses.fields(cls):
        desc = _descriptor(f, hints.get(f.name, f.type))
        if desc is None:
            continue
        if desc.key in seen:
            raise DescriptorError(
                f"key '{desc.key}' is declared by both '{seen[desc.key]}' and '{desc.name}' on {cls.__name__}"
            )
        seen[desc.key] = desc.name
        table.append(desc)

    LOG.debug("built %d field descriptors for %s", len(table), cls.__name__)
    return tuple(table)


@lru_cache(maxsize=None)
def descriptor_index(cls: type) -> Mapping[str, FieldDescriptor]:
    """Key -> descriptor view of descriptors(cls)."""
    return MappingProxyType({d.key: d for d in descriptors(cls)})
