"""
Base class and value coercion shared by all attribute records.

An attribute record is parsed from every occurrence of the native `ts`
dialect (folded right-biased), then completed by the `serde` compatibility
dialect, which only fills fields left unset. Compatibility attributes that
fail to parse are dropped and reported as `Diagnostic` records.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Self

from ..errors import AttrError
from ..inflection import Inflection
from ..schema import NATIVE_DIALECT, SERDE_DIALECT, RawAttr
from ..types import TS
from .parser import Ident, parse_args

if TYPE_CHECKING:
    from ..registry import TypeRegistry

# Predicates accepted by `bound`, e.g. `T: Clone + Default`
_BOUND_PATTERN = re.compile(r"^\s*[A-Za-z_][A-Za-z0-9_:]*(<[^>]*>)?\s*:\s*\S.*$")


class OptionalPolicy(str, Enum):
    """How `#[ts(optional)]` renders an optional field."""

    NONE = "none"  # t: T | null
    BARE = "bare"  # t?: T
    NULLABLE = "nullable"  # t?: T | null


class KeyKind(Enum):
    """Value kinds an attribute key accepts."""

    STRING = "string"
    FLAG = "flag"
    INFLECTION = "inflection"
    TYPE = "type"
    BOUND = "bound"
    OPTIONAL = "optional"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while deriving a type."""

    title: str
    content: str
    note: str

    def __str__(self) -> str:
        return f"warning: {self.title}\n  |\n  | {self.content}\n  |\n  = note: {self.note}"


@dataclass
class Attr:
    """Base class for attribute records.

    Subclasses are dataclasses whose unset values are None, False, an
    empty list or `OptionalPolicy.NONE`. `NATIVE_KEYS` and `SERDE_KEYS` map
    each accepted key to the record field it sets and its value kind.
    """

    NATIVE_KEYS: ClassVar[dict[str, tuple[str, KeyKind]]] = {}
    SERDE_KEYS: ClassVar[dict[str, tuple[str, KeyKind]]] = {}
    # Fields which concatenate when merged
    LIST_FIELDS: ClassVar[frozenset[str]] = frozenset({"bound"})

    @classmethod
    def parse(cls, raw: RawAttr, registry: TypeRegistry | None = None) -> Self:
        """Parse a single occurrence.

        Raises:
            AttrError: On an unknown key or a malformed value
        """
        keys = cls.NATIVE_KEYS if raw.dialect == NATIVE_DIALECT else cls.SERDE_KEYS
        out = cls()
        for key, value in parse_args(raw.args):
            if key not in keys:
                allowed = ", ".join(keys)
                raise AttrError(f'Unknown attribute "{key}". Allowed attributes are: {allowed}')
            field_name, kind = keys[key]
            if kind is KeyKind.IGNORED:
                continue
            coerced = _coerce(kind, key, value, registry)
            if field_name in cls.LIST_FIELDS:
                coerced = [*getattr(out, field_name), *coerced]
            setattr(out, field_name, coerced)
        return out

    def merge(self, other: Self) -> Self:
        """Right-biased merge: set fields of `other` win, lists concatenate."""
        values = {}
        for f in dataclasses.fields(self):
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            if f.name in self.LIST_FIELDS:
                values[f.name] = [*mine, *theirs]
            else:
                values[f.name] = theirs if _is_set(theirs) else mine
        return type(self)(**values)

    def merge_missing(self, other: Self) -> Self:
        """Fill fields unset in this record from `other`; this record wins."""
        values = {}
        for f in dataclasses.fields(self):
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            values[f.name] = mine if _is_set(mine) else theirs
        return type(self)(**values)

    def assert_validity(self, item: Any) -> None:
        """Check the merged record against the item it is attached to."""

    @classmethod
    def from_attrs(
        cls,
        attrs: Iterable[RawAttr],
        *,
        serde_compat: bool = True,
        diagnostics: list[Diagnostic] | None = None,
        registry: TypeRegistry | None = None,
    ) -> Self:
        """Parse and merge all occurrences, native dialect first."""
        attrs = list(attrs)
        out = parse_attrs(cls, attrs, registry)
        if serde_compat:
            out = out.merge_missing(parse_serde_attrs(cls, attrs, diagnostics, registry))
        return out


def _is_set(value: Any) -> bool:
    if value is None or value is False or value is OptionalPolicy.NONE:
        return False
    if isinstance(value, list) and not value:
        return False
    return True


def parse_attrs(cls: type[Attr], attrs: Iterable[RawAttr], registry: TypeRegistry | None = None) -> Attr:
    """Parse and fold all native `ts` occurrences."""
    out = cls()
    for raw in attrs:
        if raw.dialect == NATIVE_DIALECT:
            out = out.merge(cls.parse(raw, registry))
    return out


def parse_serde_attrs(
    cls: type[Attr],
    attrs: Iterable[RawAttr],
    diagnostics: list[Diagnostic] | None,
    registry: TypeRegistry | None = None,
) -> Attr:
    """Parse and fold all `serde` occurrences.

    Occurrences that fail to parse are skipped. When `diagnostics` is not
    None a warning is appended for each of them.
    """
    out = cls()
    for raw in attrs:
        if raw.dialect != SERDE_DIALECT:
            continue
        try:
            parsed = cls.parse(raw, registry)
        except AttrError as e:
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        title="failed to parse serde attribute",
                        content=f"#[serde({_render_args(raw.args)})]",
                        note=f"ts_gen failed to parse this attribute. It will be ignored. ({e})",
                    )
                )
            continue
        out = out.merge(parsed)
    return out


def _render_args(args: Any) -> str:
    if isinstance(args, str):
        return args
    return ", ".join(f"{k} = {v!r}" for k, v in args.items())


def _coerce(kind: KeyKind, key: str, value: Any, registry: TypeRegistry | None) -> Any:
    match kind:
        case KeyKind.FLAG:
            if value is not True:
                raise AttrError(f"`{key}` does not take a value")
            return True
        case KeyKind.STRING:
            if not isinstance(value, str):
                raise AttrError(f"expected string for `{key}`")
            return value
        case KeyKind.INFLECTION:
            if isinstance(value, Inflection):
                return value
            if not isinstance(value, str):
                raise AttrError(f"expected string for `{key}`")
            return Inflection.parse(value)
        case KeyKind.TYPE:
            if isinstance(value, TS):
                return value
            if not isinstance(value, str):
                raise AttrError(f"expected a type for `{key}`")
            from ..type_path import parse_type_path

            return parse_type_path(value, registry)
        case KeyKind.BOUND:
            return _parse_bound(key, value)
        case KeyKind.OPTIONAL:
            if value is True:
                return OptionalPolicy.BARE
            if isinstance(value, OptionalPolicy):
                return value
            if value == Ident("nullable") or value == "nullable":
                return OptionalPolicy.NULLABLE
            raise AttrError(f"Invalid value for `{key}`: expected `{key}` or `{key} = nullable`")
    raise AttrError(f"Unsupported attribute kind for `{key}`")


def _parse_bound(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        predicates = _split_top_level(value)
    elif isinstance(value, (list, tuple)) and all(isinstance(p, str) for p in value):
        predicates = list(value)
    else:
        raise AttrError(f"expected string for `{key}`")
    out = []
    for predicate in predicates:
        predicate = predicate.strip()
        if not predicate:
            continue
        if not _BOUND_PATTERN.match(predicate):
            raise AttrError(f"Invalid where-predicate in `{key}`: {predicate!r}")
        out.append(predicate)
    return out


def _split_top_level(text: str) -> list[str]:
    parts, depth, current = [], 0, []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts
