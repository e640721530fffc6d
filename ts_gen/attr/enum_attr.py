"""Container attributes of enums and the enum representation strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from ..errors import AttrError
from ..inflection import Inflection
from ..schema import EnumDef
from ..types import TS
from .base import Attr, KeyKind
from .struct_attr import DEFAULT_CRATE


class TagKind(Enum):
    EXTERNALLY = "externally"
    INTERNALLY = "internally"
    ADJACENTLY = "adjacently"
    UNTAGGED = "untagged"


@dataclass(frozen=True)
class Tagged:
    """How an enum's discriminant and payload are represented."""

    kind: TagKind
    tag: str | None = None
    content: str | None = None


@dataclass
class EnumAttr(Attr):
    crate_rename: str | None = None
    as_type: TS | None = None
    type_override: str | None = None
    rename: str | None = None
    rename_all: Inflection | None = None
    rename_all_fields: Inflection | None = None
    tag: str | None = None
    content: str | None = None
    untagged: bool = False
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
        "rename_all_fields": ("rename_all_fields", KeyKind.INFLECTION),
        "tag": ("tag", KeyKind.STRING),
        "content": ("content", KeyKind.STRING),
        "untagged": ("untagged", KeyKind.FLAG),
        "bound": ("bound", KeyKind.BOUND),
    }
    SERDE_KEYS: ClassVar = {
        "rename": ("rename", KeyKind.STRING),
        "rename_all": ("rename_all", KeyKind.INFLECTION),
        "rename_all_fields": ("rename_all_fields", KeyKind.INFLECTION),
        "tag": ("tag", KeyKind.STRING),
        "content": ("content", KeyKind.STRING),
        "untagged": ("untagged", KeyKind.FLAG),
    }

    def crate(self) -> str:
        return self.crate_rename or DEFAULT_CRATE

    def tagged(self) -> Tagged:
        """Resolve the representation strategy.

        Raises:
            AttrError: On an invalid combination of `tag`, `content` and `untagged`
        """
        match (self.untagged, self.tag, self.content):
            case (False, None, None):
                return Tagged(TagKind.EXTERNALLY)
            case (False, str() as tag, None):
                return Tagged(TagKind.INTERNALLY, tag=tag)
            case (False, str() as tag, str() as content):
                return Tagged(TagKind.ADJACENTLY, tag=tag, content=content)
            case (True, None, None):
                return Tagged(TagKind.UNTAGGED)
            case (True, str(), None):
                raise AttrError("`untagged` cannot be used with `tag`")
            case (True, _, str()):
                raise AttrError("`untagged` cannot be used with `content`")
            case _:
                raise AttrError("`content` cannot be used without `tag`")

    def assert_validity(self, item: EnumDef) -> None:
        for override, key in ((self.type_override, "type"), (self.as_type, "as")):
            if override is None:
                continue
            if key == "type" and self.as_type is not None:
                raise AttrError(f"{item.name}: `type` is not compatible with `as`")
            for other in ("rename_all", "rename_all_fields", "tag", "content"):
                if getattr(self, other) is not None:
                    raise AttrError(f"{item.name}: `{key}` is not compatible with `{other}`")
            if self.untagged:
                raise AttrError(f"{item.name}: `{key}` is not compatible with `untagged`")
        try:
            self.tagged()
        except AttrError as e:
            raise AttrError(f"{item.name}: {e}") from e
