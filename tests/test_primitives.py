from __future__ import annotations

import pytest

from inkcomb import (
    Failure,
    Parser,
    Success,
    anything,
    element,
    end_of_input,
    fail,
    literal,
    pure,
    to_parser,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("src", "rest"),
    [
        ("abc", ""),
        ("abcdef", "def"),
        ("abcabc", "abc"),
    ],
)
def test_literal_consumes_exactly_the_pattern(abc, src: str, rest: str) -> None:
    assert abc.parse(src) == Success(rest, "abc")


@pytest.mark.parametrize("src", ["", "ab", "xabc", "ABC"])
def test_literal_failure_consumes_nothing(abc, src: str) -> None:
    assert abc.parse(src) == Failure(src, "expected abc")


def test_literal_returns_the_supplied_error_object_unmodified() -> None:
    err = {"code": 7}
    r = literal("x", err).parse("y")
    assert not r
    assert r.error is err


def test_empty_literal_always_succeeds() -> None:
    assert literal("", "never").parse("abc") == Success("abc", "")


def test_literal_on_token_lists() -> None:
    p = literal(["let", "x"], "expected let x")
    assert p.parse(["let", "x", "=", 1]) == Success(["=", 1], ["let", "x"])
    assert p.parse(["let", "y"]) == Failure(["let", "y"], "expected let x")


def test_literal_outputs_the_matched_part_of_the_input() -> None:
    class Keyword(str):
        pass

    r = literal(Keyword("let"), "expected let").parse("let x")
    assert r == Success(" x", "let")
    assert type(r.value) is str


def test_literal_on_bytes() -> None:
    assert literal(b"\x89PNG", "not png").parse(b"\x89PNG\r\n") == Success(b"\r\n", b"\x89PNG")


def test_element_by_value() -> None:
    p = element("a", "expected a")
    assert p.parse("abc") == Success("bc", "a")
    assert p.parse("xbc") == Failure("xbc", "expected a")
    assert p.parse("") == Failure("", "expected a")


def test_element_by_predicate() -> None:
    p = element(str.isdigit, "expected digit")
    assert p.parse("7up") == Success("up", "7")
    assert p.parse("up") == Failure("up", "expected digit")


def test_element_on_tuples() -> None:
    p = element(lambda tok: isinstance(tok, int), "expected int")
    assert p.parse((1, "+", 2)) == Success(("+", 2), 1)


def test_anything() -> None:
    p = anything("end of input")
    assert p.parse("xy") == Success("y", "x")
    assert p.parse("") == Failure("", "end of input")


def test_end_of_input() -> None:
    p = end_of_input("trailing input")
    assert p.parse("") == Success("", None)
    assert p.parse("x") == Failure("x", "trailing input")


def test_pure_and_fail_consume_nothing() -> None:
    assert pure(42).parse("hello") == Success("hello", 42)
    assert fail("always").parse("anything") == Failure("anything", "always")


def test_parsers_are_deterministic(abc) -> None:
    assert abc.parse("abcd") == abc.parse("abcd")
    assert abc("abcd") == abc.parse("abcd")


def test_plain_functions_satisfy_the_contract() -> None:
    def two_chars(src: str) -> Success[str, str] | Failure[str, str]:
        if len(src) >= 2:
            return Success(src[2:], src[:2])
        return Failure(src, "too short")

    p = to_parser(two_chars)
    assert isinstance(p, Parser)
    assert p.name == "two_chars"
    assert p.parse("abc") == Success("c", "ab")
    assert p.seq(two_chars).parse("abcd") == Success("", ("ab", "cd"))


def test_to_parser_returns_parsers_unchanged(abc) -> None:
    assert to_parser(abc) is abc


def test_to_parser_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        to_parser("abc")  # type: ignore[arg-type]


def test_named_keeps_behavior(abc) -> None:
    renamed = abc.named("abc_keyword")
    assert renamed.name == "abc_keyword"
    assert repr(renamed) == "<Parser abc_keyword>"
    assert renamed.parse("abcd") == abc.parse("abcd")


def test_outcomes_unpack_and_compare() -> None:
    rest, value = Success("b", "a")
    assert (rest, value) == ("b", "a")
    rest, error = Failure("b", "e")
    assert (rest, error) == ("b", "e")
    assert Success("", 1) != Failure("", 1)
    assert bool(Success("", None)) is True
    assert bool(Failure("", None)) is False
    assert repr(Success("x", 1)) == "Success('x', 1)"
