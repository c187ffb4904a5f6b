"""
General use constants.
"""

from __future__ import annotations
from typing import Final

WHITESPACES: Final[frozenset[str]] = frozenset({" ", "\t", "\n", "\r", "\f"})
DECIMAL: Final[frozenset[str]] = frozenset({"0", "1", "2", "3", "4", "5", "6", "7", "8", "9"})
HEXADECIMAL: Final[frozenset[str]] = DECIMAL | {"a", "b", "c", "d", "e", "f", "A", "B", "C", "D", "E", "F"}
SIGNS: Final[frozenset[str]] = frozenset({"+", "-"})

GENERAL_ESCAPES: Final[dict[str, str]] = {
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}
"""Backslash escapes understood by `general.quoted_string()`. `\\uXXXX` is handled separately. Any other escaped character stands for itself."""

SNIPPET_WIDTH: Final[int] = 40
"""How many characters of the offending line a `ParseError` note shows around the error position."""
