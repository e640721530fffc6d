"""Attributes of struct and variant fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..errors import AttrError
from ..schema import Field
from ..types import TS, Infer, Option
from .base import Attr, KeyKind, OptionalPolicy


@dataclass
class FieldAttr(Attr):
    as_type: TS | None = None
    type_override: str | None = None
    rename: str | None = None
    inline: bool = False
    skip: bool = False
    optional: OptionalPolicy = OptionalPolicy.NONE
    flatten: bool = False
    docs: str | None = None

    NATIVE_KEYS: ClassVar = {
        "type": ("type_override", KeyKind.STRING),
        "as": ("as_type", KeyKind.TYPE),
        "rename": ("rename", KeyKind.STRING),
        "inline": ("inline", KeyKind.FLAG),
        "skip": ("skip", KeyKind.FLAG),
        "optional": ("optional", KeyKind.OPTIONAL),
        "flatten": ("flatten", KeyKind.FLAG),
    }
    SERDE_KEYS: ClassVar = {
        "rename": ("rename", KeyKind.STRING),
        "skip": ("skip", KeyKind.FLAG),
        "flatten": ("flatten", KeyKind.FLAG),
        "default": ("", KeyKind.IGNORED),
    }

    def resolve_type(self, ty: TS) -> TS:
        """The field's type after applying `as`, with `_` standing for `ty`."""
        if self.as_type is None:
            return ty
        return self.as_type.substitute({Infer.KEY: ty})

    def assert_validity(self, item: Field) -> None:
        label = item.name if item.name is not None else "<positional field>"
        if self.type_override is not None:
            if self.as_type is not None:
                raise AttrError(f"{label}: `type` is not compatible with `as`")
            if self.inline:
                raise AttrError(f"{label}: `type` is not compatible with `inline`")
            if self.flatten:
                raise AttrError(f"{label}: `type` is not compatible with `flatten`")
        if self.flatten:
            if self.as_type is not None:
                raise AttrError(f"{label}: `as` is not compatible with `flatten`")
            if self.rename is not None:
                raise AttrError(f"{label}: `rename` is not compatible with `flatten`")
            if self.inline:
                raise AttrError(f"{label}: `inline` is not compatible with `flatten`")
            if self.optional is not OptionalPolicy.NONE:
                raise AttrError(f"{label}: `optional` is not compatible with `flatten`")
        if item.name is None:
            if self.flatten:
                raise AttrError(f"{label}: `flatten` cannot be used with tuple struct fields")
            if self.rename is not None:
                raise AttrError(f"{label}: `rename` cannot be used with tuple struct fields")
            if self.optional is not OptionalPolicy.NONE:
                raise AttrError(f"{label}: `optional` cannot be used with tuple struct fields")
        if self.optional is not OptionalPolicy.NONE and self.type_override is None:
            if item.ty is None or not isinstance(self.resolve_type(item.ty), Option):
                raise AttrError(f"{label}: `optional` can only be used on an optional type")
