"""
The implementations of the main classes.
"""

from __future__ import annotations
from typing import Any, Callable, Final, Generic, Iterator, Literal, NoReturn, Protocol, Sequence, TypeVar, Union

import logging

import inkcomb.const as const
from inkcomb.either import Either, Left, Right, fold_all, fold_either


log = logging.getLogger(__name__)

_T = TypeVar("_T")
_I = TypeVar("_I", bound=Sequence[Any])
_O = TypeVar("_O")
_E = TypeVar("_E")
_O2 = TypeVar("_O2")
_E2 = TypeVar("_E2")



class ParseError(Exception):
    """
    The exception that's raised when a failed parse has to become an error.

    Parsers never raise this themselves. It's created from a `Failure`, by `Failure.exception()`, `Outcome.unwrap()`
    or `Parser.parse_or_raise()`.

    `error` holds the structured error value of the failure, untouched.
    """

    def __init__(self, source: Sequence[Any], pos: int, error: Any, msg: str | None = None) -> None:
        """
        `source`: The input that was being parsed.
        `pos`: The position of the failure within `source`.
        `error`: The error value carried by the failure.
        `msg`: The message of the exception. Defaults to the repr of `error`.
        """
        super().__init__(f"Parse failed: {error!r}" if msg is None else msg)
        self.source: Final[Sequence[Any]] = source
        self.pos: Final[int] = pos
        self.error: Final[Any] = error
        if isinstance(source, str):
            self.append_pos_note(pos)
        else:
            self.add_note(f"At position {pos} of {len(source)}")

    def append_pos_note(self, pos: int, msg: str | None = None) -> None:
        if not isinstance(self.source, str):
            raise TypeError("Line and column notes need a `str` source.")
        note: list[str] = [] if msg is None else [msg]

        src = self.source
        pos = min(pos, len(src))
        # should still work with CRLF
        line = src.count("\n", 0, pos) + 1
        column = pos - src.rfind("\n", 0, pos) # magically works even when it returns -1
        note.append(f"At position {pos} (line {line}, column {column})")

        half = const.SNIPPET_WIDTH // 2
        lines = src.splitlines()
        if len(lines) > line-1:
            line_str = lines[line-1]
            if len(line_str) >= column-1:
                if column <= half:
                    note.append(f"{line_str[:const.SNIPPET_WIDTH]}\n{' '*(column-1)}^")
                else:
                    note.append(f"{line_str[(column-half):(column+half)]}\n{' '*(half-1)}^")
        self.add_note("\n".join(note))


class UnwiredRecursionError(RuntimeError):
    """
    Raised when the handle given to a `recursive()` builder is invoked before `recursive()` returned.

    The handle may only be invoked lazily, when the finished parser is actually parsing.
    """



class Success(Generic[_I, _O]):
    """
    Returned from a parser when it succeeded.

    ```
    r = parser.parse(src)
    if r:
        r.value     # the output
        r.rest      # the input that's left
    else:
        r.error     # `r` is a `Failure`
    ```
    """
    __slots__ = ("rest", "value")

    def __init__(self, rest: _I, value: _O) -> None:
        self.rest: Final[_I] = rest
        """The remaining input. Always a suffix of the parsed input."""
        self.value: Final[_O] = value
        """The output of the parser."""

    def __bool__(self) -> Literal[True]:
        return True

    def is_success(self) -> Literal[True]:
        return True

    def unwrap(self, source: Sequence[Any] | None = None) -> _O:
        """Returns the output. (`source` is only used by `Failure.unwrap()`.)"""
        return self.value

    def __iter__(self) -> Iterator[Any]:
        """Allows `rest, value = outcome`."""
        yield self.rest
        yield self.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and self.rest == other.rest and self.value == other.value

    __hash__ = None # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Success({self.rest!r}, {self.value!r})"

class Failure(Generic[_I, _E]):
    """
    Returned from a parser when it failed. Falsy, so it can be told apart from a `Success` with `if r:`.

    Failing is a normal result, not an exceptional one. Use `unwrap()` or `exception()` to turn it into a
    `ParseError` when it should be.
    """
    __slots__ = ("rest", "error")

    def __init__(self, rest: _I, error: _E) -> None:
        self.rest: Final[_I] = rest
        """The input at the point where the decision to fail was made."""
        self.error: Final[_E] = error
        """The error value. Its shape mirrors the grammar that failed."""

    def __bool__(self) -> Literal[False]:
        return False

    def is_success(self) -> Literal[False]:
        return False

    def exception(self, source: Sequence[Any] | None = None) -> ParseError:
        """
        Converts this to a `ParseError`.

        `source`: The input given to the top level parser. Used to compute the position. If omitted, the position is
        reported relative to the remaining input.
        """
        if source is None:
            source = self.rest
        return ParseError(source, len(source) - len(self.rest), self.error)

    def unwrap(self, source: Sequence[Any] | None = None) -> NoReturn:
        """Raises the `ParseError` made by `exception()`."""
        raise self.exception(source)

    def __iter__(self) -> Iterator[Any]:
        """Allows `rest, error = outcome`."""
        yield self.rest
        yield self.error

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and self.rest == other.rest and self.error == other.error

    __hash__ = None # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Failure({self.rest!r}, {self.error!r})"

Outcome = Union[Success[_I, _O], Failure[_I, _E]]


class ParserFunction(Protocol):
    """
    A protocol for anything that can act as a parser: takes the input, returns a `Success` or a `Failure`.

    Plain functions matching it can be used wherever a `Parser` is expected.
    """
    def __call__(self, input: Any, /) -> Success[Any, Any] | Failure[Any, Any]: ...

ParserLike = Union["Parser[Any, Any, Any]", ParserFunction]


def to_parser(parser: ParserLike) -> Parser[Any, Any, Any]:
    """Wraps a plain parser function into a `Parser`. `Parser`s are returned as-is."""
    if isinstance(parser, Parser):
        return parser
    if not callable(parser):
        raise TypeError(f"Expected a parser or a callable, got {type(parser).__name__}.")
    return Parser(parser)


class Parser(Generic[_I, _O, _E]):
    """
    Wraps a parser function and provides the combinators.

    Building a parser doesn't parse anything. Parsing only happens in `parse()`, which can be called any number of
    times. Parsers hold no state, so the same parser can be used from multiple threads.

    ```
    greeting = literal("hello", "expected hello").seq(literal(" world", "expected world"))

    greeting.parse("hello world!")  # Success('!', ('hello', ' world'))
    greeting.parse("hello there")   # Failure(' there', Right('expected world'))
    greeting.parse("bye")           # Failure('bye', Left('expected hello'))
    ```

    When used for typing: `Parser[InputType, OutputType, ErrorType]`
    """
    __slots__ = ("_fn", "name")

    def __init__(self, fn: ParserFunction, name: str | None = None) -> None:
        if not callable(fn):
            raise TypeError(f"Expected a callable, got {type(fn).__name__}.")
        self._fn: ParserFunction = fn
        self.name: str = getattr(fn, "__name__", type(fn).__name__) if name is None else name
        """Only used for `repr()` and logging."""

    def parse(self, input: _I) -> Success[_I, _O] | Failure[_I, _E]:
        """Runs the parser."""
        return self._fn(input)

    def __call__(self, input: _I) -> Success[_I, _O] | Failure[_I, _E]:
        """Same as `Parser.parse()`"""
        return self._fn(input)

    def parse_or_raise(self, input: _I) -> _O:
        """Runs the parser and returns the output. Raises a `ParseError` if it fails."""
        r = self._fn(input)
        if not r:
            log.debug("%s failed at position %d: %r", self.name, len(input) - len(r.rest), r.error)
            raise r.exception(input)
        return r.value

    def named(self, name: str) -> Parser[_I, _O, _E]:
        """Returns the same parser under a different name."""
        return Parser(self._fn, name)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    # structure

    def seq(self, other: ParserLike) -> Parser[_I, tuple[_O, Any], Either[_E, Any]]:
        """
        Runs this parser, then `other` on what's left. Outputs both results as a tuple.

        Fails with `Left(error)` if this parser failed (`other` isn't run), or with `Right(error)` if `other` failed.
        """
        first = self._fn
        second = to_parser(other)
        second_fn = second._fn
        def seq_parser(input: _I) -> Success | Failure:
            r1 = first(input)
            if not r1:
                return Failure(r1.rest, Left(r1.error))
            r2 = second_fn(r1.rest)
            if not r2:
                return Failure(r2.rest, Right(r2.error))
            return Success(r2.rest, (r1.value, r2.value))
        return Parser(seq_parser, f"seq({self.name}, {second.name})")

    def alt(self, other: ParserLike) -> Parser[_I, Either[_O, Any], tuple[_E, Any]]:
        """
        Runs this parser. If it fails, runs `other` on the same input.

        Outputs `Left(output)` or `Right(output)` depending on which one matched. `other` isn't run if this parser
        matched. If both fail, fails at the original input with the tuple of both errors.
        """
        first = self._fn
        second = to_parser(other)
        second_fn = second._fn
        def alt_parser(input: _I) -> Success | Failure:
            r1 = first(input)
            if r1:
                return Success(r1.rest, Left(r1.value))
            r2 = second_fn(input)
            if r2:
                return Success(r2.rest, Right(r2.value))
            return Failure(input, (r1.error, r2.error))
        return Parser(alt_parser, f"alt({self.name}, {second.name})")

    def maybe(self) -> Parser[_I, _O | None, NoReturn]:
        """
        Makes the parser optional. Never fails.

        Outputs `None` without consuming anything if the parser failed. A parser that can itself output `None`
        without consuming looks the same either way, so map its output to something else first if the difference
        matters.
        """
        fn = self._fn
        def maybe_parser(input: _I) -> Success:
            r = fn(input)
            if r:
                return r
            return Success(input, None)
        return Parser(maybe_parser, f"maybe({self.name})")

    def many(self) -> Parser[_I, list[_O], NoReturn]:
        """
        Matches the parser repeatedly until it fails. Outputs the list of outputs. Never fails.

        If the parser succeeds without consuming anything, the repetition stops there and that output is dropped,
        since it would otherwise match forever.
        """
        fn = self._fn
        name = f"many({self.name})"
        def many_parser(input: _I) -> Success:
            values: list[_O] = []
            rest = input
            while True:
                r = fn(rest)
                if not r:
                    return Success(r.rest, values)
                if len(r.rest) >= len(rest):
                    log.debug("%s stopped on a zero-width match with %d items left", name, len(rest))
                    return Success(rest, values)
                values.append(r.value)
                rest = r.rest
        return Parser(many_parser, name)

    def first(self) -> Parser[_I, Any, _E]:
        """For `seq()` parsers. Keeps only the first output of the pair."""
        return self.map(lambda pair: pair[0]).named(f"first({self.name})")

    def second(self) -> Parser[_I, Any, _E]:
        """For `seq()` parsers. Keeps only the second output of the pair."""
        return self.map(lambda pair: pair[1]).named(f"second({self.name})")

    def skip(self, other: ParserLike) -> Parser[_I, _O, Any]:
        """
        Runs this parser, then `other`. Keeps only this parser's output.

        The errors of both must be the same type, since they're folded together.
        """
        return self.seq(other).first().fold()

    def preceded_by(self, prefix: ParserLike) -> Parser[_I, _O, Either[Any, _E]]:
        """
        Runs `prefix`, then this parser. Keeps only this parser's output.

        Fails with `Left(error)` if the prefix failed, `Right(error)` if this parser failed.
        """
        return to_parser(prefix).seq(self).second()

    def surrounded_by(self, left: ParserLike, right: ParserLike) -> Parser[_I, _O, Either[Any, Any]]:
        """
        Runs `left`, this parser, then `right`. Keeps only this parser's output.

        The error is shaped like `left.seq(self).seq(right)`:
        - `Left(Left(error))`: `left` failed.
        - `Left(Right(error))`: this parser failed.
        - `Right(error)`: `right` failed.

        Use `fold_all()` to flatten it.
        """
        return (
            to_parser(left).seq(self).seq(right)
            .map(lambda t: t[0][1])
            .named(f"surrounded_by({self.name})")
        )

    # repetition

    def at_least(self, n: int, error: _E2) -> Parser[_I, list[_O], _E2]:
        """
        Like `many()`, but fails with `error` if there were less than `n` matches.

        The failure is positioned where the last attempt failed.
        """
        if n < 0:
            raise ValueError("The count can't be negative.")
        fn = self._fn
        def at_least_parser(input: _I) -> Success | Failure:
            values: list[_O] = []
            rest = input
            while True:
                r = fn(rest)
                if not r:
                    if len(values) < n:
                        return Failure(r.rest, error)
                    return Success(r.rest, values)
                if len(r.rest) >= len(rest) and len(values) >= n:
                    return Success(rest, values)
                values.append(r.value)
                rest = r.rest
        return Parser(at_least_parser, f"at_least({self.name}, {n})")

    def at_most(self, n: int) -> Parser[_I, list[_O], NoReturn]:
        """Matches the parser up to `n` times. Never fails."""
        if n < 0:
            raise ValueError("The count can't be negative.")
        fn = self._fn
        def at_most_parser(input: _I) -> Success:
            values: list[_O] = []
            rest = input
            while len(values) < n:
                r = fn(rest)
                if not r:
                    return Success(r.rest, values)
                if len(r.rest) >= len(rest):
                    break
                values.append(r.value)
                rest = r.rest
            return Success(rest, values)
        return Parser(at_most_parser, f"at_most({self.name}, {n})")

    def exactly(self, n: int, error: _E2) -> Parser[_I, list[_O], _E2]:
        """
        Matches the parser exactly `n` times. Stops after the `n`th match, even if more could match.

        Fails with `error` if it matched fewer times, positioned where the last attempt failed.
        """
        if n < 0:
            raise ValueError("The count can't be negative.")
        fn = self._fn
        def exactly_parser(input: _I) -> Success | Failure:
            values: list[_O] = []
            rest = input
            for _ in range(n):
                r = fn(rest)
                if not r:
                    return Failure(r.rest, error)
                values.append(r.value)
                rest = r.rest
            return Success(rest, values)
        return Parser(exactly_parser, f"exactly({self.name}, {n})")

    def sep_by(self, separator: ParserLike) -> Parser[_I, list[_O], NoReturn]:
        """
        Matches zero or more of this parser, separated by `separator`. Never fails.

        A trailing separator isn't consumed.
        """
        fn = self._fn
        sep = to_parser(separator)._fn
        def sep_by_parser(input: _I) -> Success:
            r = fn(input)
            if not r:
                return Success(input, [])
            return Success(*_separated_tail(fn, sep, r.rest, [r.value]))
        return Parser(sep_by_parser, f"sep_by({self.name})")

    def sep_by1(self, separator: ParserLike, error: _E2) -> Parser[_I, list[_O], _E2]:
        """Like `sep_by()`, but fails with `error` at the original input if there isn't at least one match."""
        fn = self._fn
        sep = to_parser(separator)._fn
        def sep_by1_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return Failure(input, error)
            return Success(*_separated_tail(fn, sep, r.rest, [r.value]))
        return Parser(sep_by1_parser, f"sep_by1({self.name})")

    def chainl1(self, operator: ParserLike) -> Parser[_I, _O, _E]:
        """
        Matches one or more of this parser separated by `operator`, and combines them left associatively.

        `operator` must output a function taking two outputs and returning one. `1-2-3` becomes `(1-2)-3`.

        Fails only if the first term fails, with that failure. Stops early if an operator and term match without
        consuming anything.
        """
        fn = self._fn
        op = to_parser(operator)._fn
        def chainl1_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return r
            rest, acc = r.rest, r.value
            while (rop := op(rest)):
                if not (rterm := fn(rop.rest)) or len(rterm.rest) >= len(rest):
                    break
                acc = rop.value(acc, rterm.value)
                rest = rterm.rest
            return Success(rest, acc)
        return Parser(chainl1_parser, f"chainl1({self.name})")

    def chainr1(self, operator: ParserLike) -> Parser[_I, _O, _E]:
        """
        Like `chainl1()`, but combines right associatively. `2^3^2` becomes `2^(3^2)`.
        """
        fn = self._fn
        op = to_parser(operator)._fn
        def chainr1_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return r
            rest = r.rest
            terms: list[_O] = [r.value]
            operators: list[Callable[[_O, _O], _O]] = []
            while (rop := op(rest)):
                if not (rterm := fn(rop.rest)) or len(rterm.rest) >= len(rest):
                    break
                operators.append(rop.value)
                terms.append(rterm.value)
                rest = rterm.rest
            acc = terms[-1]
            for f, term in zip(reversed(operators), reversed(terms[:-1])):
                acc = f(term, acc)
            return Success(rest, acc)
        return Parser(chainr1_parser, f"chainr1({self.name})")

    # lookaround and recovery

    def not_(self, error: _E2) -> Parser[_I, None, _E2]:
        """
        Negative lookahead. Succeeds with `None` if this parser fails, fails with `error` if it matches.

        Never consumes anything.
        """
        fn = self._fn
        def not_parser(input: _I) -> Success | Failure:
            if fn(input):
                return Failure(input, error)
            return Success(input, None)
        return Parser(not_parser, f"not({self.name})")

    def lookahead(self) -> Parser[_I, _O, _E]:
        """Runs the parser without consuming anything, whether it matches or not."""
        fn = self._fn
        def lookahead_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return Success(input, r.value)
            return Failure(input, r.error)
        return Parser(lookahead_parser, f"lookahead({self.name})")

    def backtrack(self) -> Parser[_I, _O, _E]:
        """
        On failure, reports the original input instead of where the parser stopped.

        ```
        p = literal("abc", "no abc").seq(literal("def", "no def"))
        p.parse("abcXYZ")               # Failure('XYZ', Right('no def'))
        p.backtrack().parse("abcXYZ")   # Failure('abcXYZ', Right('no def'))
        ```
        """
        fn = self._fn
        def backtrack_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return r
            return Failure(input, r.error)
        return Parser(backtrack_parser, f"backtrack({self.name})")

    def recover_with(self, recovery: Callable[[_E], ParserLike]) -> Parser[_I, _O, Any]:
        """If the parser fails, runs the parser returned by `recovery(error)` from the original input."""
        fn = self._fn
        def recover_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return r
            return to_parser(recovery(r.error))._fn(input)
        return Parser(recover_parser, f"recover_with({self.name})")

    def or_both(self, other: ParserLike) -> Parser[_I, tuple[Success | None, Success | None], tuple[_E, Any]]:
        """
        Runs both parsers on the same input and consumes nothing.

        Outputs a tuple of the two `Success`es, with `None` in place of the one that failed. Fails with both errors
        if both failed.
        """
        first = self._fn
        second = to_parser(other)
        second_fn = second._fn
        def or_both_parser(input: _I) -> Success | Failure:
            r1 = first(input)
            r2 = second_fn(input)
            if not r1 and not r2:
                return Failure(input, (r1.error, r2.error))
            return Success(input, (r1 if r1 else None, r2 if r2 else None))
        return Parser(or_both_parser, f"or_both({self.name}, {second.name})")

    # transformation

    def map(self, f: Callable[[_O], _O2]) -> Parser[_I, _O2, _E]:
        """Replaces the output with `f(output)`. Failures pass through untouched."""
        fn = self._fn
        def map_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return Success(r.rest, f(r.value))
            return r
        return Parser(map_parser, f"map({self.name})")

    def map_err(self, f: Callable[[_E], _E2]) -> Parser[_I, _O, _E2]:
        """Replaces the error with `f(error)`. Successes pass through untouched."""
        fn = self._fn
        def map_err_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return r
            return Failure(r.rest, f(r.error))
        return Parser(map_err_parser, f"map_err({self.name})")

    def fold(self) -> Parser[_I, _O, Any]:
        """
        Collapses a `Left(error)` or `Right(error)` error into `error`.

        For when it no longer matters which side failed. Both sides should hold the same error type.
        """
        return self.map_err(fold_either).named(f"fold({self.name})")

    def fold_all(self) -> Parser[_I, _O, Any]:
        """Like `fold()`, but collapses nested branch markers all the way down."""
        return self.map_err(fold_all).named(f"fold_all({self.name})")

    def validate(self, predicate: Callable[[_O], bool], error: _E) -> Parser[_I, _O, _E]:
        """Fails with `error` at the original input if the output doesn't satisfy `predicate`."""
        fn = self._fn
        def validate_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return r
            if predicate(r.value):
                return r
            return Failure(input, error)
        return Parser(validate_parser, f"validate({self.name})")

    # binding

    def and_then(self, f: Callable[[_O], ParserLike]) -> Parser[_I, Any, _E]:
        """
        Runs the parser returned by `f(output)` on what's left. Failures pass through untouched.

        Allows the rest of the grammar to depend on what was parsed.
        """
        fn = self._fn
        def and_then_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return r
            return to_parser(f(r.value))._fn(r.rest)
        return Parser(and_then_parser, f"and_then({self.name})")

    def bind(
        self,
        on_success: Callable[[_O], ParserLike],
        on_failure: Callable[[_E], ParserLike],
    ) -> Parser[_I, Any, Any]:
        """
        Runs the parser returned by `on_success(output)` or `on_failure(error)` on what's left.
        """
        fn = self._fn
        def bind_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if r:
                return to_parser(on_success(r.value))._fn(r.rest)
            return to_parser(on_failure(r.error))._fn(r.rest)
        return Parser(bind_parser, f"bind({self.name})")

    def apply(self, arguments: ParserLike) -> Parser[_I, Any, _E]:
        """
        This parser must output a function, and `arguments` a tuple. Outputs `function(*arguments)`.

        Failures of either parser pass through untouched.
        """
        fn = self._fn
        args_fn = to_parser(arguments)._fn
        def apply_parser(input: _I) -> Success | Failure:
            r = fn(input)
            if not r:
                return r
            rargs = args_fn(r.rest)
            if not rargs:
                return rargs
            return Success(rargs.rest, r.value(*rargs.value))
        return Parser(apply_parser, f"apply({self.name})")


def _separated_tail(
    fn: ParserFunction,
    sep: ParserFunction,
    rest: Any,
    values: list[Any],
) -> tuple[Any, list[Any]]:
    """Matches `separator item` pairs for `sep_by()` and `sep_by1()`. Stops before an unmatched separator."""
    while (rsep := sep(rest)):
        if not (ritem := fn(rsep.rest)):
            break
        if len(ritem.rest) >= len(rest):
            break
        values.append(ritem.value)
        rest = ritem.rest
    return rest, values



def literal(pattern: _I, error: _E) -> Parser[_I, _I, _E]:
    """
    Matches `pattern` at the start of the input. Outputs the matched part of the input.

    The input and the pattern should be the same type of sequence. (`str` with `str`, `list` with `list`, etc.)

    On failure, nothing is consumed and `error` is returned as-is.
    """
    size = len(pattern)
    def literal_parser(input: _I) -> Success | Failure:
        if input[:size] == pattern:
            return Success(input[size:], input[:size])
        return Failure(input, error)
    return Parser(literal_parser, f"literal({pattern!r})")

def element(item: Any | Callable[[Any], bool], error: _E) -> Parser[Any, Any, _E]:
    """
    Matches a single element. Outputs the element.

    If `item` is callable, it's used as a predicate on the element. Otherwise the element must be equal to `item`.
    """
    if callable(item):
        predicate = item
        name = f"element({getattr(item, '__name__', 'predicate')})"
    else:
        predicate = lambda el: el == item
        name = f"element({item!r})"
    def element_parser(input: Sequence[Any]) -> Success | Failure:
        if len(input) > 0 and predicate(input[0]):
            return Success(input[1:], input[0])
        return Failure(input, error)
    return Parser(element_parser, name)

def anything(error: _E) -> Parser[Any, Any, _E]:
    """Matches any single element. Fails with `error` only at the end of the input."""
    def anything_parser(input: Sequence[Any]) -> Success | Failure:
        if len(input) > 0:
            return Success(input[1:], input[0])
        return Failure(input, error)
    return Parser(anything_parser, "anything")

def end_of_input(error: _E) -> Parser[Any, None, _E]:
    """Succeeds with `None` if there's nothing left to parse. Never consumes anything."""
    def end_parser(input: Sequence[Any]) -> Success | Failure:
        if len(input) == 0:
            return Success(input, None)
        return Failure(input, error)
    return Parser(end_parser, "end_of_input")

def pure(value: _T) -> Parser[Any, _T, NoReturn]:
    """Always succeeds with `value`. Consumes nothing."""
    return Parser(lambda input: Success(input, value), f"pure({value!r})")

def fail(error: _E) -> Parser[Any, NoReturn, _E]:
    """Always fails with `error`. Consumes nothing."""
    return Parser(lambda input: Failure(input, error), f"fail({error!r})")


def seq(first: ParserLike, second: ParserLike) -> Parser[Any, tuple[Any, Any], Either[Any, Any]]:
    """Same as `Parser.seq()`"""
    return to_parser(first).seq(second)

def alt(first: ParserLike, second: ParserLike) -> Parser[Any, Either[Any, Any], tuple[Any, Any]]:
    """Same as `Parser.alt()`"""
    return to_parser(first).alt(second)

def maybe(parser: ParserLike) -> Parser[Any, Any, NoReturn]:
    """Same as `Parser.maybe()`"""
    return to_parser(parser).maybe()

def many(parser: ParserLike) -> Parser[Any, list[Any], NoReturn]:
    """Same as `Parser.many()`"""
    return to_parser(parser).many()



class RecursionHandle(Parser[_I, _O, _E]):
    """
    The parser given to a `recursive()` builder.

    Delegates to the finished parser once `recursive()` has wired it. Invoking it earlier raises an
    `UnwiredRecursionError`.
    """
    __slots__ = ("target",)

    def __init__(self) -> None:
        self.target: Parser[_I, _O, _E] | None = None
        super().__init__(self._delegate, "recursive")

    def _delegate(self, input: _I) -> Success[_I, _O] | Failure[_I, _E]:
        if self.target is None:
            raise UnwiredRecursionError(
                "A recursive parser was invoked while it was still being built. "
                "Only invoke the handle from inside a parser, not from the builder itself."
            )
        return self.target._fn(input)

    def wire(self, parser: Parser[_I, _O, _E]) -> None:
        """Sets the parser to delegate to. Can only be done once."""
        if self.target is not None:
            raise RuntimeError("This recursion handle is already wired.")
        self.target = parser

def recursive(builder: Callable[[Parser[_I, _O, _E]], ParserLike]) -> Parser[_I, _O, _E]:
    """
    Builds a parser that can refer to itself.

    `builder` receives a handle that acts as the finished parser, and returns the parser's definition, which can use
    the handle anywhere inside it:

    ```
    # counts the nesting depth of balanced parentheses
    depth = recursive(lambda self:
        literal("(", "expected (")
        .seq(self)
        .seq(literal(")", "expected )"))
        .map(lambda t: t[0][1] + 1)
        .alt(pure(0))
        .map(fold_either)
    )

    depth.parse("(())")     # Success('', 2)
    ```

    The handle must not be invoked while `builder` is running.

    Every recursive path through the grammar must consume something before recursing again, otherwise parsing recurses
    until Python's `RecursionError`.
    """
    handle: RecursionHandle[_I, _O, _E] = RecursionHandle()
    built = builder(handle)
    if not callable(built):
        raise TypeError(f"The recursive builder must return a parser, got {type(built).__name__}.")
    target = to_parser(built)
    handle.wire(target)
    log.debug("wired recursive parser %s", target.name)
    return Parser(handle._fn, f"recursive({target.name})")
