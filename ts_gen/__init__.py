"""TypeScript declarations from Python type descriptions

Derives TypeScript type declarations from explicit descriptions of structs
and enums (fields, variants, generics and `ts`/`serde` attributes), and
exports them as `.ts` files with imports between them.
"""

__version__ = "1.0.0"

from .attr import Diagnostic, OptionalPolicy, TagKind, Tagged
from .compiler import DerivedType, derive
from .config import ExportConfig, FormatterConfig
from .errors import AttrError, ConfigError, ExportError, ExportPathError, FormattingError, ShapeError, TsGenError
from .inflection import Inflection
from .registry import TypeRegistry, default_registry, export_registered
from .schema import EnumDef, Field, FieldsStyle, GenericParam, RawAttr, StructDef, Variant, serde, ts
from .types import (
    BIGINT,
    BOOLEAN,
    INFER,
    NEVER,
    NULL,
    NUMBER,
    STRING,
    TS,
    UNKNOWN,
    Array,
    Dependency,
    FixedArray,
    Lazy,
    Map,
    Option,
    Placeholder,
    Primitive,
    Range,
    Result,
    Tuple,
    TypeParam,
    Wrapper,
    lazy,
    ref,
)

__all__ = [
    "derive",
    "DerivedType",
    "TS",
    "Dependency",
    "Primitive",
    "NUMBER",
    "BIGINT",
    "BOOLEAN",
    "STRING",
    "NULL",
    "UNKNOWN",
    "NEVER",
    "INFER",
    "Option",
    "Array",
    "FixedArray",
    "Tuple",
    "Map",
    "Range",
    "Result",
    "Wrapper",
    "TypeParam",
    "Placeholder",
    "Lazy",
    "lazy",
    "ref",
    "StructDef",
    "EnumDef",
    "Field",
    "Variant",
    "FieldsStyle",
    "GenericParam",
    "RawAttr",
    "ts",
    "serde",
    "Inflection",
    "OptionalPolicy",
    "TagKind",
    "Tagged",
    "Diagnostic",
    "ExportConfig",
    "FormatterConfig",
    "TypeRegistry",
    "default_registry",
    "export_registered",
    "TsGenError",
    "AttrError",
    "ConfigError",
    "ShapeError",
    "ExportError",
    "ExportPathError",
    "FormattingError",
]
