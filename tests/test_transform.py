from __future__ import annotations

import pytest

from inkcomb import Failure, Left, Right, Success, fold_all, literal, seq

pytestmark = pytest.mark.unit


def test_map_replaces_output_and_keeps_rest() -> None:
    p = literal("123", "expected 123").map(int)
    assert p.parse("1234") == Success("4", 123)


def test_map_leaves_failures_alone() -> None:
    calls: list[object] = []
    p = literal("x", "expected x").map(lambda v: calls.append(v))
    assert p.parse("y") == Failure("y", "expected x")
    assert calls == []


def test_map_err_replaces_error_and_keeps_rest() -> None:
    p = seq(literal("a", "e1"), literal("b", "e2")).map_err(lambda e: f"{e.side}: {e.value}")
    assert p.parse("ax") == Failure("x", "right: e2")
    assert p.parse("x") == Failure("x", "left: e1")


def test_map_err_leaves_successes_alone() -> None:
    calls: list[object] = []
    p = literal("x", "expected x").map_err(lambda e: calls.append(e))
    assert p.parse("xy") == Success("y", "x")
    assert calls == []


def test_fold_collapses_one_level() -> None:
    p = seq(literal("a", "no a"), literal("b", "no b")).fold()
    assert p.parse("x") == Failure("x", "no a")
    assert p.parse("ax") == Failure("x", "no b")


def test_fold_keeps_inner_shape() -> None:
    c = literal("c", "no c")
    p = seq(seq(literal("a", "no a"), literal("b", "no b")), c).fold()
    assert p.parse("ax") == Failure("x", Right("no b"))


def test_fold_all_collapses_nested_markers() -> None:
    c = literal("c", "no c")
    p = seq(seq(literal("a", "no a"), literal("b", "no b")), c).fold_all()
    assert p.parse("ax") == Failure("x", "no b")
    assert p.parse("abx") == Failure("x", "no c")


def test_fold_all_on_values() -> None:
    assert fold_all(Left(Right(Left("e")))) == "e"
    assert fold_all(("a", "b")) == ("a", "b")
    assert fold_all("plain") == "plain"


def test_seq_then_map_round_trip() -> None:
    pair = seq(literal("a", "no a"), literal("b", "no b"))
    swapped = pair.map(lambda t: (t[1], t[0]))
    restored = swapped.map(lambda t: (t[1], t[0]))
    assert restored.parse("abz") == pair.parse("abz") == Success("z", ("a", "b"))
    assert restored.parse("az") == pair.parse("az")


def test_validate() -> None:
    digit = literal("2", "no 2").alt(literal("3", "no 3")).map(lambda e: int(e.value))
    even = digit.validate(lambda n: n % 2 == 0, "expected even digit")
    assert even.parse("2x") == Success("x", 2)
    assert even.parse("3x") == Failure("3x", "expected even digit")
    assert even.parse("4x") == Failure("4x", ("no 2", "no 3"))
