"""
Utility functions for naming and documentation formatting.
"""

from __future__ import annotations

import inspect


def raw_name_to_ts_field(value: str) -> str:
    """Convert an arbitrary name to a valid TypeScript field name.

    If the name contains special characters or starts with a digit it is
    wrapped in quotes.

    Examples:
        "user_id" -> "user_id"
        "$ref" -> "$ref"
        "kebab-name" -> '"kebab-name"'
        "3d" -> '"3d"'
    """
    valid_chars = all(c.isalnum() or c in "_$" for c in value)
    does_not_start_with_digit = not value[:1].isdigit()
    if valid_chars and does_not_start_with_digit:
        return value
    return f'"{value}"'


def format_docs(docs: str | None) -> str:
    """Format documentation text as a JSDoc block.

    Returns an empty string when there is nothing to document, otherwise
    the block followed by a newline.
    """
    if not docs:
        return ""
    lines = []
    for line in inspect.cleandoc(docs).splitlines():
        line = line.rstrip()
        lines.append(f" * {line}" if line else " *")
    if not lines:
        return ""
    body = "\n".join(lines)
    return f"/**\n{body}\n */\n"


def quote_literal(value: str) -> str:
    """Render `value` as a TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
