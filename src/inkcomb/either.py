"""
Branch markers.

`Left` and `Right` record which of two sides a value came from. The combinators use them for the outputs of
`Parser.alt()` and for the errors of `Parser.seq()`, so nested markers end up mirroring the shape of the grammar.

```
r = literal("a", "no a").alt(literal("b", "no b")).parse("b")
r.value         # Right('b')
r.value.side    # 'right'
```
"""

from __future__ import annotations
from typing import Any, Callable, Generic, TypeVar, Final


_A = TypeVar("_A")
_B = TypeVar("_B")
_C = TypeVar("_C")
_D = TypeVar("_D")


class Either(Generic[_A, _B]):
    """
    Base class of `Left` and `Right`. Not meant to be instantiated directly.

    Carries no behavior other than remembering the side and the value.
    """
    __slots__ = ("value",)

    side: str = ""

    def __init__(self, value: Any) -> None:
        self.value: Final[Any] = value

    def is_left(self) -> bool:
        return isinstance(self, Left)

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def swap(self) -> Either[_B, _A]:
        """Moves the value to the other side."""
        if isinstance(self, Left):
            return Right(self.value)
        return Left(self.value)

    def map(self, on_left: Callable[[_A], _C], on_right: Callable[[_B], _D]) -> Either[_C, _D]:
        """Maps the value with the function matching its side. The side is kept."""
        if isinstance(self, Left):
            return Left(on_left(self.value))
        return Right(on_right(self.value))

    def map_left(self, f: Callable[[_A], _C]) -> Either[_C, _B]:
        """Maps the value only if this is a `Left`."""
        if isinstance(self, Left):
            return Left(f(self.value))
        return self  # type: ignore[return-value]

    def map_right(self, f: Callable[[_B], _C]) -> Either[_A, _C]:
        """Maps the value only if this is a `Right`."""
        if isinstance(self, Right):
            return Right(f(self.value))
        return self  # type: ignore[return-value]

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((self.side, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class Left(Either[_A, Any]):
    """The first (left) side."""
    __slots__ = ()
    side: str = "left"

class Right(Either[Any, _B]):
    """The second (right) side."""
    __slots__ = ()
    side: str = "right"


def fold_either(value: Either[_A, _A]) -> _A:
    """
    Collapses `Left(x)` or `Right(x)` into `x`.

    Only meaningful when both sides hold the same type.
    """
    if not isinstance(value, Either):
        raise TypeError(f"Expected a Left or Right, got {type(value).__name__}.")
    return value.value

def fold_all(value: Any) -> Any:
    """
    Collapses nested branch markers all the way down.

    `Left(Right(Left("e")))` becomes `"e"`. Values that aren't branch markers are returned as-is, so tuples coming
    from `Parser.alt()` are left alone.
    """
    while isinstance(value, Either):
        value = value.value
    return value