"""
Attribute model: parsing, merging and validation of `ts` and `serde` attributes.
"""

from __future__ import annotations

from .base import Attr, Diagnostic, OptionalPolicy, parse_attrs, parse_serde_attrs
from .enum_attr import EnumAttr, TagKind, Tagged
from .field_attr import FieldAttr
from .struct_attr import StructAttr
from .variant_attr import VariantAttr

__all__ = [
    "Attr",
    "Diagnostic",
    "EnumAttr",
    "FieldAttr",
    "OptionalPolicy",
    "StructAttr",
    "TagKind",
    "Tagged",
    "VariantAttr",
    "parse_attrs",
    "parse_serde_attrs",
]
