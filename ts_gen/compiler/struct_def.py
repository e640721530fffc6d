"""
Compilation of struct definitions and of the payloads of enum variants.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..attr import FieldAttr, OptionalPolicy, StructAttr
from ..errors import AttrError
from ..inflection import Inflection
from ..schema import Field, FieldsStyle, StructDef
from ..types import TS, Option
from ..utils import format_docs, quote_literal, raw_name_to_ts_field
from .derived import DeriveContext, DerivedTS, Renderer, Shape, constant
from .deps import Dependencies


def field_attr(field: Field, ctx: DeriveContext) -> FieldAttr:
    """Parse and check the attributes of `field`."""
    attr = FieldAttr.from_attrs(
        field.attrs,
        serde_compat=ctx.serde_compat,
        diagnostics=ctx.diagnostics,
        registry=ctx.registry,
    )
    if attr.docs is None:
        attr.docs = field.docs
    attr.assert_validity(field)
    return attr


def _field_type(field: Field) -> TS:
    if field.ty is None:
        label = field.name if field.name is not None else "<positional field>"
        raise AttrError(f"{label}: field has no type")
    return field.ty


def _type_renderer(ty: TS, attr: FieldAttr, deps: Dependencies) -> Renderer:
    """Render a field's type, recording what it depends on."""
    if attr.type_override is not None:
        return constant(attr.type_override)
    if attr.inline:
        deps.append_from(ty)
        return lambda mapping: ty.substitute(mapping).inline()
    deps.push(ty)
    return lambda mapping: ty.substitute(mapping).name()


def named(attr: StructAttr, name: str, fields: list[Field], ctx: DeriveContext) -> Shape:
    """Compile named fields into `{ a: A, b: B }`, intersected with flattened fields."""
    formatted: list[Renderer] = []
    flattened: list[Renderer] = []
    deps = Dependencies()

    if attr.tag is not None:
        formatted.append(constant(f"{raw_name_to_ts_field(attr.tag)}: {quote_literal(name)}"))

    for field in fields:
        _format_named_field(field, attr.rename_all, ctx, formatted, flattened, deps)

    def render(mapping: Mapping[str, TS]) -> tuple[list[str], list[str]]:
        return [r(mapping) for r in formatted], [r(mapping) for r in flattened]

    def inline(mapping: Mapping[str, TS]) -> str:
        fields_out, flattened_out = render(mapping)
        match (len(fields_out), len(flattened_out)):
            case (0, 0):
                return "Record<string, never>"
            case (_, 0):
                return "{ " + ", ".join(fields_out) + " }"
            case (0, 1):
                return flattened_out[0]
            case (0, _):
                return " & ".join(flattened_out)
            case _:
                return "{ " + ", ".join(fields_out) + " } & " + " & ".join(flattened_out)

    def inline_flattened(mapping: Mapping[str, TS]) -> str:
        fields_out, flattened_out = render(mapping)
        parts = ["{ " + ", ".join(fields_out) + " }"] if fields_out else []
        parts.extend(flattened_out)
        if not parts:
            return "{}"
        return " & ".join(parts)

    return Shape(inline=inline, inline_flattened=inline_flattened, dependencies=deps, object_like=True)


def _format_named_field(
    field: Field,
    rename_all: Inflection | None,
    ctx: DeriveContext,
    formatted: list[Renderer],
    flattened: list[Renderer],
    deps: Dependencies,
) -> None:
    attr = field_attr(field, ctx)
    if attr.skip:
        return

    ty = attr.resolve_type(_field_type(field))

    if attr.flatten:
        deps.append_from(ty)
        flattened.append(lambda mapping: ty.substitute(mapping).inline_flattened())
        return

    match attr.optional:
        case OptionalPolicy.BARE:
            marker = "?"
            shown = ty.inner if isinstance(ty, Option) else ty
        case OptionalPolicy.NULLABLE:
            marker, shown = "?", ty
        case _:
            marker, shown = "", ty

    type_deps = Dependencies()
    render_type = _type_renderer(shown, attr, type_deps)
    deps.append(type_deps)

    if attr.rename is not None:
        key = attr.rename
    elif rename_all is not None:
        key = rename_all.apply(field.name)
    else:
        key = field.name
    prefix = format_docs(attr.docs) + raw_name_to_ts_field(key) + marker
    formatted.append(lambda mapping: f"{prefix}: {render_type(mapping)}")


def newtype(field: Field, ctx: DeriveContext) -> Shape:
    """Compile a single unnamed field, which stands for its own type."""
    attr = field_attr(field, ctx)
    if attr.skip:
        return unit()
    ty = attr.resolve_type(_field_type(field))
    deps = Dependencies()
    render_type = _type_renderer(ty, attr, deps)
    object_like = None if attr.type_override is not None else ty.is_object_like()
    return Shape(inline=render_type, dependencies=deps, object_like=object_like)


def tuple_(fields: list[Field], ctx: DeriveContext) -> Shape:
    """Compile unnamed fields into `[A, B]`."""
    rendered: list[Renderer] = []
    deps = Dependencies()
    for field in fields:
        attr = field_attr(field, ctx)
        if attr.skip:
            continue
        rendered.append(_type_renderer(attr.resolve_type(_field_type(field)), attr, deps))

    def inline(mapping: Mapping[str, TS]) -> str:
        if not rendered:
            return "never[]"
        return "[" + ", ".join(r(mapping) for r in rendered) + "]"

    return Shape(inline=inline, dependencies=deps, object_like=False)


def unit() -> Shape:
    return Shape(inline=constant("null"), object_like=False, empty_payload=True)


def type_def(attr: StructAttr, name: str, fields: list[Field], style: FieldsStyle, ctx: DeriveContext) -> Shape:
    """Compile the fields of a struct or variant according to their layout."""
    match style:
        case FieldsStyle.NAMED:
            return named(attr, name, fields, ctx)
        case FieldsStyle.UNNAMED if len(fields) == 1:
            return newtype(fields[0], ctx)
        case FieldsStyle.UNNAMED:
            return tuple_(fields, ctx)
        case _:
            return unit()


def override_shape(type_override: str | None, as_type: TS | None) -> Shape | None:
    """Shape of a container with a `type` or `as` override, None without one."""
    if type_override is not None:
        return Shape(inline=constant(type_override))
    if as_type is not None:
        deps = Dependencies()
        deps.append_from(as_type)
        return Shape(
            inline=lambda mapping: as_type.substitute(mapping).inline(),
            inline_flattened=lambda mapping: as_type.substitute(mapping).inline_flattened(),
            dependencies=deps,
            object_like=as_type.is_object_like(),
        )
    return None


def struct_def(definition: StructDef, ctx: DeriveContext) -> DerivedTS:
    """Compile a struct definition."""
    attr = StructAttr.from_attrs(
        definition.attrs,
        serde_compat=ctx.serde_compat,
        diagnostics=ctx.diagnostics,
        registry=ctx.registry,
    )
    if attr.docs is None:
        attr.docs = definition.docs
    attr.assert_validity(definition)

    ts_name = attr.rename or definition.name
    shape = override_shape(attr.type_override, attr.as_type)
    if shape is None:
        shape = type_def(attr, ts_name, definition.fields, definition.fields_style, ctx)

    for param in definition.generics:
        if param.default is not None:
            shape.dependencies.push(param.default)

    return DerivedTS(
        ts_name=ts_name,
        shape=shape,
        generics=list(definition.generics),
        docs=attr.docs,
        export=attr.export,
        export_to=attr.export_to,
        crate_rename=attr.crate(),
        bound=attr.bound,
        diagnostics=ctx.diagnostics if ctx.diagnostics is not None else [],
    )
