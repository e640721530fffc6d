from __future__ import annotations

from typing import TYPE_CHECKING

from ..schema import EnumDef, StructDef
from .derived import DeriveContext, DerivedTS, DerivedType
from .enum_def import enum_def
from .struct_def import struct_def

if TYPE_CHECKING:
    from ..config import ExportConfig
    from ..registry import TypeRegistry

__all__ = ["DeriveContext", "DerivedTS", "DerivedType", "derive"]


def derive(
    definition: StructDef | EnumDef,
    *,
    config: ExportConfig | None = None,
    registry: TypeRegistry | None = None,
) -> DerivedType:
    """Derive the TypeScript representation of a struct or enum definition.

    The derived type is recorded in `registry` (the default registry if not
    given) under its TypeScript name.

    Args:
        definition: The shape of the type
        config: Export configuration, for `serde_compat` and `no_serde_warnings`
        registry: Registry used to resolve type paths and to record the type

    Returns:
        The derived type, bound to placeholders for its generic parameters

    Raises:
        AttrError: If an attribute is unknown, malformed or invalid for its item
    """
    from ..config import default_config
    from ..registry import default_registry

    config = config or default_config()
    registry = registry if registry is not None else default_registry
    ctx = DeriveContext(
        serde_compat=config.serde_compat,
        diagnostics=None if config.no_serde_warnings else [],
        registry=registry,
    )
    match definition:
        case StructDef():
            derived = struct_def(definition, ctx)
        case EnumDef():
            derived = enum_def(definition, ctx)
        case _:
            raise TypeError(f"Cannot derive {type(definition).__name__}, expected StructDef or EnumDef")
    ty = DerivedType(derived)
    registry.register(ty)
    return ty
