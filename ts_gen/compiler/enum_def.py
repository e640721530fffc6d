"""
Compilation of enum definitions.

The representation strategy is resolved once per enum. Each variant's
payload is compiled with the struct rules and wrapped according to it:

    externally:  "A" | { "B": number }
    internally:  { type: "A", x: number } | { type: "B" } & Payload
    adjacently:  { "t": "A" } | { "t": "B", "c": number }
    untagged:    null | number
"""

from __future__ import annotations

from collections.abc import Mapping

from ..attr import EnumAttr, StructAttr, TagKind, Tagged, VariantAttr
from ..errors import AttrError
from ..schema import EnumDef, FieldsStyle, Variant
from ..types import TS
from ..utils import format_docs, quote_literal, raw_name_to_ts_field
from .derived import DeriveContext, DerivedTS, Renderer, Shape, constant
from .deps import Dependencies
from .struct_def import override_shape, type_def


def variant_attr(variant: Variant, ctx: DeriveContext) -> VariantAttr:
    attr = VariantAttr.from_attrs(
        variant.attrs,
        serde_compat=ctx.serde_compat,
        diagnostics=ctx.diagnostics,
        registry=ctx.registry,
    )
    if attr.docs is None:
        attr.docs = variant.docs
    attr.assert_validity(variant)
    return attr


def _keyed(literal: str, payload: Renderer) -> Renderer:
    return lambda mapping: f"{{ {literal}: {payload(mapping)} }}"


def _adjacent(tagged: Tagged, literal: str, payload: Renderer) -> Renderer:
    tag, content = quote_literal(tagged.tag), quote_literal(tagged.content)
    return lambda mapping: f"{{ {tag}: {literal}, {content}: {payload(mapping)} }}"


def _intersected(tag_field: str, payload: Renderer) -> Renderer:
    return lambda mapping: f"{tag_field} & {payload(mapping)}"


def _documented(docs: str, render: Renderer) -> Renderer:
    return lambda mapping: docs + render(mapping)


def _format_variant(
    enum_name: str,
    enum_attr: EnumAttr,
    tagged: Tagged,
    variant: Variant,
    ctx: DeriveContext,
    deps: Dependencies,
) -> tuple[Renderer, bool | None] | None:
    """Compile one variant, or return None if it is skipped.

    Returns:
        The variant renderer and whether the rendered variant is an object
        (None if unknown)
    """
    attr = variant_attr(variant, ctx)
    if attr.skip:
        return None

    style = variant.fields_style
    if attr.rename is not None:
        name = attr.rename
    elif enum_attr.rename_all is not None:
        name = enum_attr.rename_all.apply(variant.name)
    else:
        name = variant.name

    untagged = attr.untagged or tagged.kind is TagKind.UNTAGGED
    internally = tagged.kind is TagKind.INTERNALLY and not untagged

    if internally and style is FieldsStyle.UNNAMED and len(variant.fields) != 1:
        raise AttrError(f"{enum_name}::{variant.name}: tuple variants are not supported by internally tagged enums")

    payload_attr = StructAttr(
        rename_all=attr.rename_all or (enum_attr.rename_all_fields if style is FieldsStyle.NAMED else None),
        tag=tagged.tag if internally and style is FieldsStyle.NAMED else None,
    )
    payload = type_def(payload_attr, name, variant.fields, style, ctx)
    deps.append(payload.dependencies)

    literal = quote_literal(name)
    docs = format_docs(attr.docs)

    object_like: bool | None = True
    if untagged:
        render = payload.inline
        object_like = payload.object_like
    else:
        match tagged.kind:
            case TagKind.EXTERNALLY if payload.empty_payload:
                render = constant(literal)
                object_like = False
            case TagKind.EXTERNALLY:
                render = _keyed(literal, payload.inline)
            case TagKind.ADJACENTLY if payload.empty_payload:
                render = constant(f"{{ {quote_literal(tagged.tag)}: {literal} }}")
            case TagKind.ADJACENTLY:
                render = _adjacent(tagged, literal, payload.inline)
            case TagKind.INTERNALLY if style is FieldsStyle.NAMED:
                render = payload.inline
            case TagKind.INTERNALLY:
                tag_field = f"{{ {raw_name_to_ts_field(tagged.tag)}: {literal} }}"
                if payload.empty_payload:
                    render = constant(tag_field)
                elif payload.object_like is False:
                    raise AttrError(
                        f"{enum_name}::{variant.name}: internally tagged enums cannot contain "
                        "newtype variants of a non-object type"
                    )
                else:
                    render = _intersected(tag_field, payload.inline)

    if docs:
        render = _documented(docs, render)
    return render, object_like


def enum_def(definition: EnumDef, ctx: DeriveContext) -> DerivedTS:
    """Compile an enum definition into a union of its variants."""
    attr = EnumAttr.from_attrs(
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
        shape = _union(ts_name, attr, definition, ctx)

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


def _union(ts_name: str, attr: EnumAttr, definition: EnumDef, ctx: DeriveContext) -> Shape:
    tagged = attr.tagged()
    deps = Dependencies()
    variants: list[Renderer] = []
    object_likeness: list[bool | None] = []
    for variant in definition.variants:
        compiled = _format_variant(ts_name, attr, tagged, variant, ctx, deps)
        if compiled is not None:
            variants.append(compiled[0])
            object_likeness.append(compiled[1])

    def inline(mapping: Mapping[str, TS]) -> str:
        if not variants:
            return "never"
        return " | ".join(v(mapping) for v in variants)

    def inline_flattened(mapping: Mapping[str, TS]) -> str:
        return f"({inline(mapping)})"

    return Shape(
        inline=inline,
        inline_flattened=inline_flattened,
        dependencies=deps,
        object_like=_union_object_like(object_likeness),
    )


def _union_object_like(object_likeness: list[bool | None]) -> bool | None:
    if not object_likeness:
        return None
    if any(o is False for o in object_likeness):
        return False
    if any(o is None for o in object_likeness):
        return None
    return True
