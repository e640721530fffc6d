"""
Derived types: the compiled form of a struct or enum definition.

`DerivedTS` holds what the compiler produced for a definition, independent
of any generic arguments. `DerivedType` binds it to concrete arguments and
implements the `TS` contract.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from ..attr import Diagnostic
from ..errors import ShapeError
from ..schema import GenericParam
from ..types import TS, Placeholder
from .deps import Dependencies

if TYPE_CHECKING:
    from ..registry import TypeRegistry

# Renders a fragment of TypeScript for a mapping of generic parameter names to types
Renderer = Callable[[Mapping[str, TS]], str]


def constant(text: str) -> Renderer:
    return lambda mapping: text


@dataclass
class DeriveContext:
    """Settings shared by every item of one derivation."""

    serde_compat: bool = True
    # None suppresses serde warnings
    diagnostics: list[Diagnostic] | None = field(default_factory=list)
    registry: TypeRegistry | None = None


@dataclass
class Shape:
    """The compiled fields or variants of a struct, variant payload or enum."""

    inline: Renderer
    inline_flattened: Renderer | None = None
    dependencies: Dependencies = field(default_factory=Dependencies)
    object_like: bool | None = None
    # Unit shapes and newtypes whose only field is skipped carry no payload
    empty_payload: bool = False


@dataclass
class DerivedTS:
    """A compiled definition."""

    ts_name: str
    shape: Shape
    generics: list[GenericParam] = field(default_factory=list)
    docs: str | None = None
    export: bool = False
    export_to: str | None = None
    crate_rename: str = "ts_gen"
    bound: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def output_path(self) -> PurePosixPath:
        """Path of the generated file, relative to the output directory.

        Defaults to `<name>.ts`; an `export_to` ending in `/` is a directory.
        """
        if self.export_to is None:
            return PurePosixPath(f"{self.ts_name}.ts")
        if self.export_to.endswith("/"):
            return PurePosixPath(f"{self.export_to}{self.ts_name}.ts")
        return PurePosixPath(self.export_to)

    def format_generics(self) -> str:
        """Format the generic parameters as `<A, B = number>`, or "" if there are none."""
        if not self.generics:
            return ""
        params = []
        for param in self.generics:
            if param.default is not None:
                params.append(f"{param.name} = {param.default.name()}")
            else:
                params.append(param.name)
        return "<" + ", ".join(params) + ">"


class DerivedType(TS):
    """A user-defined type, bound to concrete generic arguments.

    Unbound generic parameters are bound to placeholders named after the
    parameters. Use `of` to bind concrete arguments:

        page = derive(StructDef("Page", fields=[Field("items", Array(TypeParam("T")))],
                                generics=[GenericParam("T")]))
        page.of(NUMBER).name()  # "Page<number>"
    """

    def __init__(self, derived: DerivedTS, args: list[TS] | None = None):
        if args is None:
            args = [Placeholder(param.name) for param in derived.generics]
        if len(args) != len(derived.generics):
            raise TypeError(f"{derived.ts_name} takes {len(derived.generics)} generic argument(s), got {len(args)}")
        self.derived = derived
        self.args = list(args)
        self.docs = derived.docs

    def of(self, *args: TS) -> DerivedType:
        """Bind this type's generic parameters to `args`."""
        return DerivedType(self.derived, list(args))

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.derived.diagnostics

    @property
    def exported(self) -> bool:
        """Whether the type carries the `export` attribute."""
        return self.derived.export

    @property
    def crate(self) -> str:
        return self.derived.crate_rename

    @property
    def bound(self) -> list[str]:
        """Where-predicates given with the `bound` attribute."""
        return self.derived.bound

    def _mapping(self) -> dict[str, TS]:
        return {param.name: arg for param, arg in zip(self.derived.generics, self.args)}

    def name(self) -> str:
        if not self.args:
            return self.derived.ts_name
        return f"{self.derived.ts_name}<{', '.join(arg.name() for arg in self.args)}>"

    def ident(self) -> str:
        return self.derived.ts_name

    def inline(self) -> str:
        return self.derived.shape.inline(self._mapping())

    def inline_flattened(self) -> str:
        if self.derived.shape.inline_flattened is None:
            raise ShapeError("flattened", self.name())
        return self.derived.shape.inline_flattened(self._mapping())

    def decl(self) -> str:
        inline = self.generic_form().inline()
        return f"type {self.derived.ts_name}{self.derived.format_generics()} = {inline};"

    def decl_concrete(self) -> str:
        return f"type {self.derived.ts_name} = {self.inline()};"

    def generic_form(self) -> DerivedType:
        """This type bound to its generic placeholders, as used by `decl`."""
        return DerivedType(self.derived)

    def dependency_types(self) -> list[TS]:
        return self.derived.shape.dependencies.resolve(self._mapping())

    def generics(self) -> list[TS]:
        out: list[TS] = []
        for arg in self.args:
            out.append(arg)
            out.extend(arg.generics())
        return out

    def output_path(self) -> PurePosixPath | None:
        return self.derived.output_path()

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        if not self.args:
            return self
        return DerivedType(self.derived, [arg.substitute(mapping) for arg in self.args])

    def is_object_like(self) -> bool | None:
        return self.derived.shape.object_like

    def identity(self) -> Hashable:
        return ("derived", id(self.derived), tuple(arg.identity() for arg in self.args))
