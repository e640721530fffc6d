"""
Shape descriptions for user types.

These plain dataclasses describe a struct or enum (its fields or variants,
their types, generic parameters and attributes) so that it can be derived
into a TypeScript declaration with `ts_gen.derive`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .types import TS

NATIVE_DIALECT = "ts"
SERDE_DIALECT = "serde"


@dataclass
class RawAttr:
    """One attribute occurrence, e.g. `#[ts(rename_all = "camelCase")]`.

    `args` is either a mapping of keys to values or an argument string in
    attribute syntax (`'rename = "id", skip'`).
    """

    dialect: str = NATIVE_DIALECT
    args: str | Mapping[str, Any] = ""


def ts(args: str | Mapping[str, Any] = "", **kwargs: Any) -> RawAttr:
    """Build a native `ts` attribute occurrence.

    Examples:
        ts('rename_all = "camelCase"')
        ts(rename_all="camelCase", export=True)
        ts(as_="Option<_>")
    """
    if kwargs:
        if args:
            raise TypeError("ts() takes either an argument string or keyword arguments")
        return RawAttr(NATIVE_DIALECT, kwargs)
    return RawAttr(NATIVE_DIALECT, args)


def serde(args: str | Mapping[str, Any] = "", **kwargs: Any) -> RawAttr:
    """Build a `serde` compatibility attribute occurrence."""
    if kwargs:
        if args:
            raise TypeError("serde() takes either an argument string or keyword arguments")
        return RawAttr(SERDE_DIALECT, kwargs)
    return RawAttr(SERDE_DIALECT, args)


class FieldsStyle(str, Enum):
    """How the fields of a struct or variant are laid out."""

    NAMED = "named"  # struct S { a: T }
    UNNAMED = "unnamed"  # struct S(T, U)
    UNIT = "unit"  # struct S;


@dataclass
class Field:
    """A field of a struct or of an enum variant."""

    name: str | None = None  # None for positional fields
    ty: TS | None = None
    attrs: list[RawAttr] = field(default_factory=list)
    docs: str | None = None


@dataclass
class GenericParam:
    """A generic type parameter, with an optional default type."""

    name: str = ""
    default: TS | None = None


def infer_style(fields: list[Field], style: FieldsStyle | None) -> FieldsStyle:
    if style is not None:
        return style
    if not fields:
        return FieldsStyle.UNIT
    if all(f.name is None for f in fields):
        return FieldsStyle.UNNAMED
    return FieldsStyle.NAMED


@dataclass
class Variant:
    """An enum variant."""

    name: str = ""
    fields: list[Field] = field(default_factory=list)
    style: FieldsStyle | None = None
    attrs: list[RawAttr] = field(default_factory=list)
    docs: str | None = None

    @property
    def fields_style(self) -> FieldsStyle:
        return infer_style(self.fields, self.style)


@dataclass
class StructDef:
    """A struct definition."""

    name: str = ""
    fields: list[Field] = field(default_factory=list)
    style: FieldsStyle | None = None
    generics: list[GenericParam] = field(default_factory=list)
    attrs: list[RawAttr] = field(default_factory=list)
    docs: str | None = None

    @property
    def fields_style(self) -> FieldsStyle:
        return infer_style(self.fields, self.style)


@dataclass
class EnumDef:
    """An enum definition."""

    name: str = ""
    variants: list[Variant] = field(default_factory=list)
    generics: list[GenericParam] = field(default_factory=list)
    attrs: list[RawAttr] = field(default_factory=list)
    docs: str | None = None
