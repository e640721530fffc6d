"""
Registry of derived types.

`derive` records every derived type here by its TypeScript name. The
registry resolves names in `as` type paths and `ref()` references, and lists
the types marked with `export` for `export_registered`.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from .logging import get_logger

if TYPE_CHECKING:
    from .compiler import DerivedType
    from .config import ExportConfig

logger = get_logger("registry")


class TypeRegistry:
    def __init__(self):
        self._types: dict[str, DerivedType] = {}

    def register(self, ty: DerivedType) -> None:
        name = ty.ident()
        if name in self._types and self._types[name].derived is not ty.derived:
            logger.debug("Replacing registered type %s", name)
        self._types[name] = ty

    def get(self, name: str) -> DerivedType:
        try:
            return self._types[name]
        except KeyError:
            raise KeyError(f"No type named {name!r} has been derived") from None

    def exportable(self) -> list[DerivedType]:
        """Registered types carrying the `export` attribute, in registration order."""
        return [ty for ty in self._types.values() if ty.exported]

    def clear(self) -> None:
        self._types.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[DerivedType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


default_registry = TypeRegistry()


def export_registered(
    out_dir: str | Path | None = None,
    config: ExportConfig | None = None,
    registry: TypeRegistry | None = None,
) -> list[Path]:
    """Export every type marked with `export`, together with its dependencies.

    Returns:
        The written files, without duplicates, in write order
    """
    from .export import export_all_into

    registry = registry if registry is not None else default_registry
    written: list[Path] = []
    for ty in registry.exportable():
        for path in export_all_into(ty, out_dir, config=config):
            if path not in written:
                written.append(path)
    return written
