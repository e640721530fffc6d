"""
Parser for attribute argument lists.

Turns either an argument string in attribute syntax
(`'rename_all = "camelCase", skip, optional = nullable'`) or a mapping of
keys to values into an ordered list of `(key, value)` entries.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import AttrError

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<string>"(?:[^"\\]|\\.)*")
    |(?P<number>-?\d+(?:\.\d+)?)
    |(?P<punct>[=,()])
    """,
    re.VERBOSE,
)

# Keyword-argument spellings of keys that are Python keywords
_KWARG_ALIASES = {"as_": "as", "type_": "type", "crate_": "crate"}


@dataclass(frozen=True)
class Ident:
    """A bare identifier value, e.g. `nullable` in `optional = nullable`."""

    name: str


@dataclass(frozen=True)
class Group:
    """A parenthesized argument group, e.g. `rename(serialize = "a")`."""

    raw: str


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int


def tokenize(text: str) -> list[Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            raise AttrError(f"Unexpected character {text[pos]!r} at position {pos} in attribute `{text}`")
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "punct":
            kind = value
        tokens.append(Token(kind, value, pos))
        pos = match.end()
    return tokens


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    return re.sub(r"\\(.)", lambda m: {"n": "\n", "t": "\t"}.get(m.group(1), m.group(1)), body)


def parse_args(args: str | Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Parse an attribute occurrence into `(key, value)` entries.

    Flag keys (`skip`, `inline`, ...) get the value True. In mapping form a
    False value means the key is absent.

    Raises:
        AttrError: If the argument string is malformed
    """
    if isinstance(args, Mapping):
        entries = []
        for key, value in args.items():
            key = _KWARG_ALIASES.get(key, key)
            if value is False or value is None:
                continue
            entries.append((key, value))
        return entries
    return _parse_string(args)


def _parse_string(text: str) -> list[tuple[str, Any]]:
    tokens = tokenize(text)
    entries: list[tuple[str, Any]] = []
    i = 0
    while i < len(tokens):
        key = tokens[i]
        if key.kind != "ident":
            raise AttrError(f"Expected an attribute name at position {key.pos} in `{text}`, found {key.text!r}")
        i += 1
        value: Any = True
        if i < len(tokens) and tokens[i].kind == "=":
            i += 1
            if i >= len(tokens):
                raise AttrError(f"Missing value for `{key.text}` in `{text}`")
            token = tokens[i]
            if token.kind == "string":
                value = _unquote(token.text)
            elif token.kind == "ident":
                value = Ident(token.text)
            elif token.kind == "number":
                value = Ident(token.text)
            else:
                raise AttrError(f"Expected a value for `{key.text}` in `{text}`, found {token.text!r}")
            i += 1
        elif i < len(tokens) and tokens[i].kind == "(":
            start = tokens[i].pos
            depth = 0
            while i < len(tokens):
                if tokens[i].kind == "(":
                    depth += 1
                elif tokens[i].kind == ")":
                    depth -= 1
                    if depth == 0:
                        break
                i += 1
            if i >= len(tokens):
                raise AttrError(f"Unbalanced parentheses after `{key.text}` in `{text}`")
            value = Group(text[start + 1 : tokens[i].pos])
            i += 1
        entries.append((key.text, value))
        if i < len(tokens):
            if tokens[i].kind != ",":
                raise AttrError(f"Expected `,` at position {tokens[i].pos} in `{text}`, found {tokens[i].text!r}")
            i += 1
    return entries
