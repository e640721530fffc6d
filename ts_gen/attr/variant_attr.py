"""Attributes of enum variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..errors import AttrError
from ..inflection import Inflection
from ..schema import FieldsStyle, Variant
from .base import Attr, KeyKind


@dataclass
class VariantAttr(Attr):
    rename: str | None = None
    rename_all: Inflection | None = None
    skip: bool = False
    untagged: bool = False
    docs: str | None = None

    NATIVE_KEYS: ClassVar = {
        "rename": ("rename", KeyKind.STRING),
        "skip": ("skip", KeyKind.FLAG),
        "untagged": ("untagged", KeyKind.FLAG),
        "rename_all": ("rename_all", KeyKind.INFLECTION),
    }
    SERDE_KEYS: ClassVar = {
        "rename": ("rename", KeyKind.STRING),
        "rename_all": ("rename_all", KeyKind.INFLECTION),
        "skip": ("skip", KeyKind.FLAG),
        "untagged": ("untagged", KeyKind.FLAG),
    }

    def assert_validity(self, item: Variant) -> None:
        if self.rename_all is not None and item.fields_style is not FieldsStyle.NAMED:
            raise AttrError(f"{item.name}: `rename_all` cannot be used with unit or tuple variants")
