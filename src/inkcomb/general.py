"""
General purpose parsers for string input.

All of them are built from the public combinators, and all of them fail with a plain string message. They can be
used as they are, or as examples of how to put the combinators together.
"""

from __future__ import annotations
from typing import Any
from collections.abc import Sequence

import inkcomb.const as const
from inkcomb.either import Either, fold_either
from inkcomb.main import Parser, ParserLike, to_parser, literal, element, anything, pure


# single characters

def space() -> Parser[str, str, str]:
    return element(" ", "Expected a space.").named("space")

def tab() -> Parser[str, str, str]:
    return element("\t", "Expected a tab.").named("tab")

def newline() -> Parser[str, str, str]:
    return element("\n", "Expected a newline.").named("newline")

def carriage_return() -> Parser[str, str, str]:
    return element("\r", "Expected a carriage return.").named("carriage_return")

def whitespace() -> Parser[str, str, str]:
    """Any single character from `const.WHITESPACES`."""
    return element(lambda c: c in const.WHITESPACES, "Expected whitespace.").named("whitespace")

def whitespaces() -> Parser[str, str, Any]:
    """Zero or more whitespace characters, joined into a string. Never fails."""
    return whitespace().many().map("".join).named("whitespaces")


# comments

def line_comment(start: str) -> Parser[str, str, str]:
    """
    A comment from `start` to the end of the line.

    Outputs the text between `start` and the line break. The line breaks after the comment are consumed too.
    """
    content = element(lambda c: c != "\n", "Expected comment content.").many().map("".join)
    return (
        literal(start, f"Expected `{start}`.")
        .seq(content)
        .seq(newline().many())
        .map(lambda t: t[0][1])
        .fold_all()
        .named(f"line_comment({start!r})")
    )

def block_comment(start: str, end: str) -> Parser[str, str, str]:
    """
    A comment between `start` and `end`. Outputs the text in between.

    Doesn't nest: the first `end` closes the comment.
    """
    content_char = (
        literal(end, f"Expected `{end}`.").not_(f"Reached `{end}`.")
        .seq(anything("Unterminated block comment."))
        .second()
    )
    return (
        literal(start, f"Expected `{start}`.")
        .seq(content_char.many().map("".join))
        .seq(literal(end, f"Expected `{end}` to close the block comment."))
        .map(lambda t: t[0][1])
        .fold_all()
        .named(f"block_comment({start!r}, {end!r})")
    )


# tokens

def _middle_error(error: Either[Either[Any, Any], Any]) -> Any:
    # whitespaces() never fails, so the error is always Left(Right(error))
    return error.value.value

def lexeme(parser: ParserLike) -> Parser[str, Any, Any]:
    """
    Matches `parser` with any whitespace around it.

    Keeps the output and the error of `parser` as they are.
    """
    parser = to_parser(parser)
    return (
        parser.surrounded_by(whitespaces(), whitespaces())
        .map_err(_middle_error)
        .named(f"lexeme({parser.name})")
    )

def integer() -> Parser[str, int, str]:
    """
    A decimal integer with an optional sign. Outputs an `int`.

    Consumes nothing on failure.
    """
    sign = element(lambda c: c in const.SIGNS, "Expected a sign.").maybe()
    digits = element(lambda c: c in const.DECIMAL, "Expected a digit.").at_least(1, "Expected an integer.")
    return (
        sign.seq(digits)
        .map(lambda t: int((t[0] or "") + "".join(t[1])))
        .fold()
        .backtrack()
        .named("integer")
    )

def quoted_string(
    quotes: Sequence[str] = ('"', "'"),
    *,
    escape: str = "\\",
    escapes: dict[str, str] = const.GENERAL_ESCAPES,
) -> Parser[str, str, str]:
    """
    A string between a pair of matching quote characters. Outputs the contents with the escapes resolved.

    `escapes` maps the character after `escape` to its replacement. `u` followed by 4 hexadecimal digits stands for
    that code point. Any other escaped character stands for itself.

    Consumes nothing on failure. A malformed escape fails with its own message instead of the closing quote's.
    """
    unicode_escape = (
        element(lambda c: c in const.HEXADECIMAL, "Expected a hexadecimal digit.")
        .exactly(4, "Expected 4 hexadecimal characters after unicode escape sequence.")
        .map(lambda digits: chr(int("".join(digits), 16)))
    )

    def resolve(char: str) -> Parser[str, str, str]:
        if char == "u":
            return unicode_escape
        return pure(escapes.get(char, char))

    escaped = (
        literal(escape, f"Expected `{escape}`.")
        .seq(anything(f"Expected a character to escape after `{escape}`.").and_then(resolve))
        .second()
    )

    def contents(quote: str) -> Parser[str, str, str]:
        plain = element(lambda c: c != quote and c != escape, "Expected a character.")
        # where the contents stop is either the closing quote or a bad escape
        closing = (
            literal(quote, f"Expected closing quote `{quote}`.")
            .alt(escaped)
            .map_err(lambda errors: errors[1].value if errors[1].is_right() else errors[0])
        )
        return (
            escaped.alt(plain).map(fold_either)
            .many().map("".join)
            .skip(closing)
        )

    return (
        element(lambda c: c in quotes, "Expected a quoted string.")
        .and_then(contents)
        .backtrack()
        .named("quoted_string")
    )


# lexing helpers

def _inner_error(error: Either[Any, Any]) -> Any:
    # the skipped prefix never fails, so the error is always Right(error)
    return error.value

def skip_spaces(parser: ParserLike) -> Parser[str, Any, Any]:
    """Matches `parser` after any number of spaces. Keeps the output and the error of `parser`."""
    parser = to_parser(parser)
    return (
        parser.preceded_by(space().many())
        .map_err(_inner_error)
        .named(f"skip_spaces({parser.name})")
    )

def skip_line_comment(parser: ParserLike, start: str) -> Parser[str, Any, Any]:
    """Matches `parser`, skipping a `line_comment(start)` before it if there is one."""
    parser = to_parser(parser)
    return (
        parser.preceded_by(line_comment(start).maybe())
        .map_err(_inner_error)
        .named(f"skip_line_comment({parser.name}, {start!r})")
    )

def skip_block_comment(parser: ParserLike, start: str, end: str) -> Parser[str, Any, Any]:
    """Matches `parser`, skipping a `block_comment(start, end)` before it if there is one."""
    parser = to_parser(parser)
    return (
        parser.preceded_by(block_comment(start, end).maybe())
        .map_err(_inner_error)
        .named(f"skip_block_comment({parser.name}, {start!r}, {end!r})")
    )

def char_to_string(parser: ParserLike) -> Parser[Any, str, Any]:
    """Converts the output of a single element parser to a `str`. Useful on token sequences."""
    parser = to_parser(parser)
    return parser.map(str).named(f"char_to_string({parser.name})")

def to_uppercase(parser: ParserLike) -> Parser[str, str, Any]:
    parser = to_parser(parser)
    return parser.map(str.upper).named(f"to_uppercase({parser.name})")

def to_lowercase(parser: ParserLike) -> Parser[str, str, Any]:
    parser = to_parser(parser)
    return parser.map(str.lower).named(f"to_lowercase({parser.name})")
