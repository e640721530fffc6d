"""
Case conversion for `rename_all` and `rename_all_fields`.

Snake case is the pivot every other inflection is derived from. Only
ASCII letters change case.
"""

from __future__ import annotations

import string
from enum import Enum

from .errors import AttrError

_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def ascii_lower(text: str) -> str:
    return text.translate(_TO_LOWER)


def ascii_upper(text: str) -> str:
    return text.translate(_TO_UPPER)


class Inflection(Enum):
    """A renaming rule, keyed by its serde spelling."""

    LOWER = "lowercase"
    UPPER = "UPPERCASE"
    CAMEL = "camelCase"
    SNAKE = "snake_case"
    PASCAL = "PascalCase"
    SCREAMING_SNAKE = "SCREAMING_SNAKE_CASE"
    KEBAB = "kebab-case"
    SCREAMING_KEBAB = "SCREAMING-KEBAB-CASE"

    @classmethod
    def parse(cls, value: str) -> Inflection:
        """Parse a `rename_all` value.

        Raises:
            AttrError: If the value is not one of the accepted spellings
        """
        for inflection in cls:
            if inflection.value == value:
                return inflection
        accepted = ", ".join(f'"{inflection.value}"' for inflection in cls)
        raise AttrError(f'Value "{value}" is not valid for "rename_all". Accepted values are: {accepted}')

    def apply(self, text: str) -> str:
        """Apply this inflection to `text`.

        Examples:
            Inflection.SNAKE.apply("UserId") -> "user_id"
            Inflection.CAMEL.apply("user_id") -> "userId"
            Inflection.SCREAMING_KEBAB.apply("userId") -> "USER-ID"
        """
        match self:
            case Inflection.LOWER:
                return ascii_lower(text)
            case Inflection.UPPER:
                return ascii_upper(text)
            case Inflection.CAMEL:
                pascal = Inflection.PASCAL.apply(text)
                return ascii_lower(pascal[:1]) + pascal[1:]
            case Inflection.SNAKE:
                return _to_snake(text)
            case Inflection.PASCAL:
                return _to_pascal(text)
            case Inflection.SCREAMING_SNAKE:
                return ascii_upper(_to_snake(text))
            case Inflection.KEBAB:
                return _to_snake(text).replace("_", "-")
            case Inflection.SCREAMING_KEBAB:
                return ascii_upper(_to_snake(text).replace("_", "-"))


def _to_snake(text: str) -> str:
    out = []
    for i, ch in enumerate(text):
        if i != 0 and "A" <= ch <= "Z":
            out.append("_")
        out.append(ascii_lower(ch))
    return "".join(out)


def _to_pascal(text: str) -> str:
    out = []
    capitalize = True
    for ch in text:
        if ch == "_":
            capitalize = True
        elif capitalize:
            out.append(ascii_upper(ch))
            capitalize = False
        else:
            out.append(ch)
    return "".join(out)
