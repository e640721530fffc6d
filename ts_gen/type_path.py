"""
Parser for type paths given as strings in `as` attributes.

Supports `_`, primitive names, a few generic constructors and the names of
derived types known to a registry:

    "Option<_>"  "Vec<UserId>"  "HashMap<string, Vec<number>>"  "[number, string]"
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .errors import AttrError
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
    Map,
    Option,
    Tuple,
    Wrapper,
)

if TYPE_CHECKING:
    from .registry import TypeRegistry

_TOKEN_PATTERN = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*|[<>\[\],])")

PRIMITIVES: dict[str, TS] = {
    "_": INFER,
    "number": NUMBER,
    "bigint": BIGINT,
    "boolean": BOOLEAN,
    "string": STRING,
    "null": NULL,
    "unknown": UNKNOWN,
    "never": NEVER,
    "int": NUMBER,
    "float": NUMBER,
    "str": STRING,
    "bool": BOOLEAN,
    "None": NULL,
}

# name -> (arity, constructor)
CONSTRUCTORS = {
    "Option": (1, Option),
    "Optional": (1, Option),
    "Vec": (1, Array),
    "Array": (1, Array),
    "list": (1, Array),
    "Box": (1, Wrapper),
    "HashMap": (2, Map),
    "Map": (2, Map),
    "dict": (2, Map),
}


def _tokenize(text: str) -> list[str]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            raise AttrError(f"Invalid type path `{text}`")
        tokens.append(match.group(1))
        pos = match.end()
    return tokens


class _TypePathParser:
    def __init__(self, text: str, registry: TypeRegistry | None):
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0
        self.registry = registry

    def peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def expect(self, token: str) -> None:
        if self.peek() != token:
            raise AttrError(f"Invalid type path `{self.text}`: expected `{token}`")
        self.pos += 1

    def parse(self) -> TS:
        ty = self.parse_type()
        if self.peek() is not None:
            raise AttrError(f"Invalid type path `{self.text}`: unexpected `{self.peek()}`")
        return ty

    def parse_list(self, close: str) -> list[TS]:
        items = [self.parse_type()]
        while self.peek() == ",":
            self.pos += 1
            items.append(self.parse_type())
        self.expect(close)
        return items

    def parse_type(self) -> TS:
        token = self.peek()
        if token is None:
            raise AttrError(f"Invalid type path `{self.text}`: unexpected end")
        self.pos += 1
        if token == "[":
            return Tuple(*self.parse_list("]"))
        if not (token[0].isalpha() or token[0] == "_"):
            raise AttrError(f"Invalid type path `{self.text}`: unexpected `{token}`")
        args: list[TS] = []
        if self.peek() == "<":
            self.pos += 1
            args = self.parse_list(">")
        return self.resolve(token, args)

    def resolve(self, name: str, args: list[TS]) -> TS:
        if name in PRIMITIVES and not args:
            return PRIMITIVES[name]
        if name in CONSTRUCTORS:
            arity, constructor = CONSTRUCTORS[name]
            if len(args) != arity:
                raise AttrError(f"Invalid type path `{self.text}`: `{name}` takes {arity} argument(s)")
            return constructor(*args)
        from .registry import default_registry

        registry = self.registry if self.registry is not None else default_registry
        if name not in registry:
            raise AttrError(f"Invalid type path `{self.text}`: unknown type `{name}`")
        ty = registry.get(name)
        return ty.of(*args) if args else ty


def parse_type_path(text: str, registry: TypeRegistry | None = None) -> TS:
    """Parse a type path string into a `TS` value.

    Raises:
        AttrError: If the path is malformed or names an unknown type
    """
    return _TypePathParser(text, registry).parse()
