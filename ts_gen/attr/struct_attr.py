"""Container attributes of structs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from ..errors import AttrError
from ..inflection import Inflection
from ..schema import FieldsStyle, StructDef
from ..types import TS
from .base import Attr, KeyKind

DEFAULT_CRATE = "ts_gen"


@dataclass
class StructAttr(Attr):
    """Attributes of a struct, or of the payload of an enum variant."""

    crate_rename: str | None = None
    as_type: TS | None = None
    type_override: str | None = None
    rename: str | None = None
    rename_all: Inflection | None = None
    tag: str | None = None
    export: bool = False
    export_to: str | None = None
    bound: list[str] = field(default_factory=list)
    docs: str | None = None

    NATIVE_KEYS: ClassVar = {
        "crate": ("crate_rename", KeyKind.STRING),
        "export": ("export", KeyKind.FLAG),
        "export_to": ("export_to", KeyKind.STRING),
        "as": ("as_type", KeyKind.TYPE),
        "type": ("type_override", KeyKind.STRING),
        "rename": ("rename", KeyKind.STRING),
        "rename_all": ("rename_all", KeyKind.INFLECTION),
        "tag": ("tag", KeyKind.STRING),
        "bound": ("bound", KeyKind.BOUND),
    }
    SERDE_KEYS: ClassVar = {
        "rename": ("rename", KeyKind.STRING),
        "rename_all": ("rename_all", KeyKind.INFLECTION),
        "tag": ("tag", KeyKind.STRING),
    }

    def crate(self) -> str:
        return self.crate_rename or DEFAULT_CRATE

    def assert_validity(self, item: StructDef) -> None:
        if self.type_override is not None:
            if self.as_type is not None:
                raise AttrError(f"{item.name}: `type` is not compatible with `as`")
            if self.rename_all is not None:
                raise AttrError(f"{item.name}: `type` is not compatible with `rename_all`")
            if self.tag is not None:
                raise AttrError(f"{item.name}: `type` is not compatible with `tag`")
        if self.as_type is not None:
            if self.rename_all is not None:
                raise AttrError(f"{item.name}: `as` is not compatible with `rename_all`")
            if self.tag is not None:
                raise AttrError(f"{item.name}: `as` is not compatible with `tag`")
        if item.fields_style is not FieldsStyle.NAMED and self.type_override is None and self.as_type is None:
            if self.rename_all is not None:
                raise AttrError(f"{item.name}: `rename_all` cannot be used with unit or tuple structs")
            if self.tag is not None:
                raise AttrError(f"{item.name}: `tag` cannot be used with unit or tuple structs")
