"""
Parser combinators that build an error tree alongside the syntax tree.

See the objects for more explanations.

See the `inkcomb.general` module for general purpose parsers you can use as examples.

Defining parsers:
```
digit = element(str.isdigit, "expected a digit")
number = digit.at_least(1, "expected a number").map(lambda ds: int("".join(ds)))
signed = literal("-", "expected -").maybe().seq(number)
```

Using parsers:
```
r = signed.parse("-42 apples")
if r:
    ... # `r` is a `Success`: `r.value == ("-", 42)`, `r.rest == " apples"`
else:
    ... # `r` is a `Failure`: `r.error` tells which part failed, e.g. `Right("expected a number")`
```

Errors aren't flattened unless asked to. `seq()` fails with `Left(error)` or `Right(error)`, and `alt()` fails with
the tuple of both errors, so the shape of an error mirrors the grammar. Use `Parser.map_err()`, `Parser.fold()` or
`Parser.fold_all()` to reduce it.
"""

import logging

import inkcomb.const as const
import inkcomb.main
from inkcomb.either import (
    Either,
    Left,
    Right,
    fold_either,
    fold_all,
)
from inkcomb.main import (
    ParseError,
    UnwiredRecursionError,
    Success,
    Failure,
    Outcome,
    ParserFunction,
    ParserLike,
    Parser,
    RecursionHandle,
    to_parser,
    literal,
    element,
    anything,
    end_of_input,
    pure,
    fail,
    seq,
    alt,
    maybe,
    many,
    recursive,
)
import inkcomb.general as general

# Stay silent unless the application configures logging.
logging.getLogger("inkcomb").addHandler(logging.NullHandler())
