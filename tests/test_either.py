from __future__ import annotations

import pytest

from inkcomb import Either, Left, Right, fold_either

pytestmark = pytest.mark.unit


def test_sides() -> None:
    assert Left(1).is_left() and not Left(1).is_right()
    assert Right(1).is_right() and not Right(1).is_left()
    assert isinstance(Left(1), Either)
    assert Left(1).side == "left"
    assert Right(1).side == "right"


def test_equality_depends_on_side_and_value() -> None:
    assert Left(1) == Left(1)
    assert Left(1) != Right(1)
    assert Left(1) != Left(2)
    assert Left(1) != 1
    assert len({Left(1), Left(1), Right(1)}) == 2


def test_swap() -> None:
    assert Left("a").swap() == Right("a")
    assert Right("a").swap() == Left("a")


def test_map_variants() -> None:
    assert Left(2).map(lambda x: x * 10, str) == Left(20)
    assert Right(2).map(lambda x: x * 10, str) == Right("2")
    assert Left(2).map_left(lambda x: x + 1) == Left(3)
    assert Right(2).map_left(lambda x: x + 1) == Right(2)
    assert Right(2).map_right(lambda x: x + 1) == Right(3)
    assert Left(2).map_right(lambda x: x + 1) == Left(2)


def test_fold_either() -> None:
    assert fold_either(Left("e")) == "e"
    assert fold_either(Right("e")) == "e"
    assert fold_either(Left(Right("e"))) == Right("e")
    with pytest.raises(TypeError):
        fold_either("e")  # type: ignore[arg-type]


def test_repr() -> None:
    assert repr(Left("x")) == "Left('x')"
    assert repr(Right(Left(1))) == "Right(Left(1))"
