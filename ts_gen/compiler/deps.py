"""
Dependency accumulation for derived types.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from ..types import TS


class DepMode(Enum):
    PUSH = "push"  # the type itself and its generic arguments
    APPEND = "append"  # the dependencies of the type (inlined or flattened)


class Dependencies:
    """Records which types a derived type depends on.

    Entries are stored against the generic definition and resolved for a
    concrete set of generic arguments with `resolve`.
    """

    def __init__(self):
        self._entries: list[tuple[DepMode, TS]] = []

    def push(self, ty: TS) -> None:
        """Depend on `ty`, referenced by name."""
        self._entries.append((DepMode.PUSH, ty))

    def append_from(self, ty: TS) -> None:
        """Depend on everything `ty` depends on, because `ty` is inlined."""
        self._entries.append((DepMode.APPEND, ty))

    def append(self, other: Dependencies) -> None:
        self._entries.extend(other._entries)

    def resolve(self, mapping: Mapping[str, TS]) -> list[TS]:
        out: list[TS] = []
        for mode, ty in self._entries:
            ty = ty.substitute(mapping)
            if mode is DepMode.PUSH:
                out.append(ty)
                out.extend(ty.generics())
            else:
                out.extend(ty.dependency_types())
        return out
