"""
The `TS` contract and the built-in type shapes.

Every exportable type implements `TS`. The built-in shapes (primitives,
optionals, collections, tuples, maps, wrappers and generic parameters)
form a closed set; user types are derived with `ts_gen.derive` and
produce `DerivedType` instances, which implement the same contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from .errors import ShapeError

if TYPE_CHECKING:
    from .config import ExportConfig
    from .registry import TypeRegistry

# Arrays longer than this limit are emitted as Array<T>
ARRAY_TUPLE_LIMIT = 64


@dataclass(frozen=True)
class Dependency:
    """A TypeScript type which is depended upon by other types.

    This information is required for generating import statements.
    """

    identity: Hashable
    ts_name: str
    # Relative to the output directory
    output_path: PurePosixPath

    @staticmethod
    def from_type(ty: TS) -> Dependency | None:
        """Build a dependency for `ty`, or None if `ty` cannot be exported."""
        output_path = ty.output_path()
        if output_path is None:
            return None
        return Dependency(identity=ty.identity(), ts_name=ty.ident(), output_path=output_path)


class TS(ABC):
    """A type which can be represented in TypeScript.

    Operations a shape does not support raise `ShapeError`.
    """

    docs: str | None = None

    @abstractmethod
    def name(self) -> str:
        """Name of this type in TypeScript, including generic arguments."""

    @abstractmethod
    def identity(self) -> Hashable:
        """Stable identity; equal for the same concrete type."""

    def ident(self) -> str:
        """Identifier of this type, excluding generic arguments."""
        name = self.name()
        index = name.find("<")
        return name if index == -1 else name[:index]

    def inline(self) -> str:
        """Formats this type's definition, e.g. `{ user_id: number }`."""
        raise ShapeError("inlined", self.name())

    def inline_flattened(self) -> str:
        """Formats this type's definition for flattening into a parent."""
        raise ShapeError("flattened", self.name())

    def decl(self) -> str:
        """Declaration with generic placeholders, e.g. `type Page<T> = ...;`."""
        raise ShapeError("declared", self.name())

    def decl_concrete(self) -> str:
        """Declaration using the bound generic arguments."""
        raise ShapeError("declared", self.name())

    def generic_form(self) -> TS:
        """This type as declared by `decl`, with its generic parameters unbound."""
        return self

    def dependency_types(self) -> list[TS]:
        return []

    def generics(self) -> list[TS]:
        return []

    def output_path(self) -> PurePosixPath | None:
        """Path relative to the output directory, None if not exportable."""
        return None

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        """Return this type with generic parameters replaced from `mapping`."""
        return self

    def is_object_like(self) -> bool | None:
        """Whether values of this type serialize as objects (None if unknown)."""
        return False

    def dependencies(self) -> list[Dependency]:
        """The exportable subset of `dependency_types()`."""
        deps = []
        for ty in self.dependency_types():
            dep = Dependency.from_type(ty)
            if dep is not None:
                deps.append(dep)
        return deps

    def export(self, config: ExportConfig | None = None) -> Path:
        """Export this type, without its dependencies, to the configured directory."""
        from .export import export_into

        return export_into(self, config=config)

    def export_all(self, config: ExportConfig | None = None) -> list[Path]:
        """Export this type and all of its dependencies to the configured directory."""
        from .export import export_all_into

        return export_all_into(self, config=config)

    def export_all_to(self, out_dir: str | Path, config: ExportConfig | None = None) -> list[Path]:
        """Export this type and all of its dependencies into `out_dir`."""
        from .export import export_all_into

        return export_all_into(self, out_dir, config=config)

    def export_to_string(self, config: ExportConfig | None = None) -> str:
        """Generate the file content for this type without touching the filesystem."""
        from .export import export_to_string

        return export_to_string(self, config=config)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TS):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name()!r})"


class Primitive(TS):
    """A scalar type with a fixed TypeScript name."""

    def __init__(self, ts_name: str):
        self.ts_name = ts_name

    def name(self) -> str:
        return self.ts_name

    def inline(self) -> str:
        return self.ts_name

    def identity(self) -> Hashable:
        return ("primitive", self.ts_name)


NUMBER = Primitive("number")
BIGINT = Primitive("bigint")
BOOLEAN = Primitive("boolean")
STRING = Primitive("string")
NULL = Primitive("null")
UNKNOWN = Primitive("unknown")
NEVER = Primitive("never")


class Option(TS):
    """An optional value, `T | null`."""

    def __init__(self, inner: TS):
        self.inner = inner

    def name(self) -> str:
        return f"{self.inner.name()} | null"

    def inline(self) -> str:
        return f"{self.inner.inline()} | null"

    def dependency_types(self) -> list[TS]:
        return self.inner.dependency_types()

    def generics(self) -> list[TS]:
        return [*self.inner.generics(), self.inner]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Option(self.inner.substitute(mapping))

    def is_object_like(self) -> bool | None:
        return self.inner.is_object_like()

    def identity(self) -> Hashable:
        return ("option", self.inner.identity())


class Array(TS):
    """A variable length sequence, `Array<T>`."""

    def __init__(self, inner: TS):
        self.inner = inner

    def name(self) -> str:
        return f"Array<{self.inner.name()}>"

    def ident(self) -> str:
        return "Array"

    def inline(self) -> str:
        return f"Array<{self.inner.inline()}>"

    def dependency_types(self) -> list[TS]:
        return self.inner.dependency_types()

    def generics(self) -> list[TS]:
        return [*self.inner.generics(), self.inner]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Array(self.inner.substitute(mapping))

    def identity(self) -> Hashable:
        return ("array", self.inner.identity())


class FixedArray(TS):
    """A fixed length sequence, emitted as a tuple of `length` elements."""

    def __init__(self, inner: TS, length: int):
        self.inner = inner
        self.length = length

    def name(self) -> str:
        if self.length > ARRAY_TUPLE_LIMIT:
            return Array(self.inner).name()
        return "[" + ", ".join(self.inner.name() for _ in range(self.length)) + "]"

    def inline(self) -> str:
        if self.length > ARRAY_TUPLE_LIMIT:
            return Array(self.inner).inline()
        return "[" + ", ".join(self.inner.inline() for _ in range(self.length)) + "]"

    def dependency_types(self) -> list[TS]:
        return self.inner.dependency_types()

    def generics(self) -> list[TS]:
        return [*self.inner.generics(), self.inner]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return FixedArray(self.inner.substitute(mapping), self.length)

    def identity(self) -> Hashable:
        return ("fixed_array", self.inner.identity(), self.length)


class Tuple(TS):
    """A positional tuple, `[A, B, ...]`. Tuples have no declaration."""

    def __init__(self, *elements: TS):
        self.elements = list(elements)

    def name(self) -> str:
        return "[" + ", ".join(e.name() for e in self.elements) + "]"

    def inline(self) -> str:
        return "[" + ", ".join(e.inline() for e in self.elements) + "]"

    def dependency_types(self) -> list[TS]:
        deps: list[TS] = []
        for element in self.elements:
            deps.append(element)
            deps.extend(element.generics())
        return deps

    def generics(self) -> list[TS]:
        out: list[TS] = []
        for element in self.elements:
            out.extend(element.generics())
            out.append(element)
        return out

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Tuple(*(e.substitute(mapping) for e in self.elements))

    def identity(self) -> Hashable:
        return ("tuple", tuple(e.identity() for e in self.elements))


class Map(TS):
    """A key/value map, `{ [key: K]: V }`."""

    def __init__(self, key: TS, value: TS):
        self.key = key
        self.value = value

    def name(self) -> str:
        return f"{{ [key: {self.key.name()}]: {self.value.name()} }}"

    def inline(self) -> str:
        return f"{{ [key: {self.key.inline()}]: {self.value.inline()} }}"

    def dependency_types(self) -> list[TS]:
        return [*self.key.dependency_types(), *self.value.dependency_types()]

    def generics(self) -> list[TS]:
        return [*self.key.generics(), self.key, *self.value.generics(), self.value]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Map(self.key.substitute(mapping), self.value.substitute(mapping))

    def is_object_like(self) -> bool | None:
        return True

    def identity(self) -> Hashable:
        return ("map", self.key.identity(), self.value.identity())


class Range(TS):
    """A half-open range, `{ start: I, end: I }`."""

    def __init__(self, inner: TS):
        self.inner = inner

    def name(self) -> str:
        return f"{{ start: {self.inner.name()}, end: {self.inner.name()} }}"

    def inline(self) -> str:
        return f"{{ start: {self.inner.inline()}, end: {self.inner.inline()} }}"

    def dependency_types(self) -> list[TS]:
        return self.inner.dependency_types()

    def generics(self) -> list[TS]:
        return [*self.inner.generics(), self.inner]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Range(self.inner.substitute(mapping))

    def is_object_like(self) -> bool | None:
        return True

    def identity(self) -> Hashable:
        return ("range", self.inner.identity())


class Result(TS):
    """A success-or-failure value, `{ Ok: T } | { Err: E }`."""

    def __init__(self, ok: TS, err: TS):
        self.ok = ok
        self.err = err

    def name(self) -> str:
        return f"{{ Ok: {self.ok.name()} }} | {{ Err: {self.err.name()} }}"

    def inline(self) -> str:
        return f"{{ Ok: {self.ok.inline()} }} | {{ Err: {self.err.inline()} }}"

    def dependency_types(self) -> list[TS]:
        return [*self.ok.dependency_types(), *self.err.dependency_types()]

    def generics(self) -> list[TS]:
        return [*self.ok.generics(), self.ok, *self.err.generics(), self.err]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Result(self.ok.substitute(mapping), self.err.substitute(mapping))

    def is_object_like(self) -> bool | None:
        return True

    def identity(self) -> Hashable:
        return ("result", self.ok.identity(), self.err.identity())


class Wrapper(TS):
    """A transparent wrapper (box, reference, cell, ...) around another type.

    Wrappers have the name and definition of the wrapped type but no
    declaration of their own.
    """

    def __init__(self, inner: TS, kind: str = "Box"):
        self.inner = inner
        self.kind = kind

    def name(self) -> str:
        return self.inner.name()

    def inline(self) -> str:
        return self.inner.inline()

    def inline_flattened(self) -> str:
        return self.inner.inline_flattened()

    def decl(self) -> str:
        raise ShapeError("declared", f"{self.kind}<{self.inner.name()}>")

    def decl_concrete(self) -> str:
        raise ShapeError("declared", f"{self.kind}<{self.inner.name()}>")

    def dependency_types(self) -> list[TS]:
        return self.inner.dependency_types()

    def generics(self) -> list[TS]:
        return [self.inner, *self.inner.generics()]

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return Wrapper(self.inner.substitute(mapping), self.kind)

    def is_object_like(self) -> bool | None:
        return self.inner.is_object_like()

    def identity(self) -> Hashable:
        return ("wrapper", self.kind, self.inner.identity())


class TypeParam(TS):
    """Reference to a generic parameter inside a type definition."""

    def __init__(self, param: str):
        self.param = param

    def name(self) -> str:
        return self.param

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return mapping.get(self.param, self)

    def is_object_like(self) -> bool | None:
        return None

    def identity(self) -> Hashable:
        return ("param", self.param)


class Placeholder(TS):
    """Opaque stand-in for a generic parameter in a generic declaration."""

    def __init__(self, param: str):
        self.param = param

    def name(self) -> str:
        return self.param

    def is_object_like(self) -> bool | None:
        return None

    def identity(self) -> Hashable:
        return ("placeholder", self.param)


class Infer(TS):
    """The `_` marker in an `as` override, standing for the field's own type."""

    KEY = "_"

    def name(self) -> str:
        return self.KEY

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return mapping.get(self.KEY, self)

    def identity(self) -> Hashable:
        return ("infer",)


INFER = Infer()


class Lazy(TS):
    """A deferred reference, used for recursive and mutually recursive types."""

    def __init__(self, resolver: Callable[[], TS]):
        self._resolver = resolver
        self._resolved: TS | None = None

    def resolve(self) -> TS:
        if self._resolved is None:
            self._resolved = self._resolver()
        return self._resolved

    def name(self) -> str:
        return self.resolve().name()

    def ident(self) -> str:
        return self.resolve().ident()

    def inline(self) -> str:
        return self.resolve().inline()

    def inline_flattened(self) -> str:
        return self.resolve().inline_flattened()

    def decl(self) -> str:
        return self.resolve().decl()

    def decl_concrete(self) -> str:
        return self.resolve().decl_concrete()

    def generic_form(self) -> TS:
        return self.resolve().generic_form()

    def dependency_types(self) -> list[TS]:
        return self.resolve().dependency_types()

    def generics(self) -> list[TS]:
        return self.resolve().generics()

    def output_path(self) -> PurePosixPath | None:
        return self.resolve().output_path()

    def substitute(self, mapping: Mapping[str, TS]) -> TS:
        return self.resolve().substitute(mapping)

    def is_object_like(self) -> bool | None:
        # Not resolvable while the referenced type may still be undefined.
        if self._resolved is None:
            return None
        return self._resolved.is_object_like()

    def identity(self) -> Hashable:
        return self.resolve().identity()

    @property
    def docs(self) -> str | None:
        return self.resolve().docs

    def __repr__(self) -> str:
        if self._resolved is None:
            return "Lazy(<unresolved>)"
        return f"Lazy({self._resolved!r})"


def lazy(resolver: Callable[[], TS]) -> Lazy:
    """Defer a type reference until it is first used."""
    return Lazy(resolver)


def ref(ts_name: str, registry: TypeRegistry | None = None) -> Lazy:
    """Reference a derived type by its TypeScript name, resolved on first use."""

    def resolve() -> TS:
        from .registry import default_registry

        return (registry if registry is not None else default_registry).get(ts_name)

    return Lazy(resolve)
