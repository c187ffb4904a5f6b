"""Pytest configuration and fixtures.

Provides a call-counting parser double for observing short-circuit behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from inkcomb import Failure, Success, literal, Parser

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CountingParser:
    """Parser test double that records how often, and on what, it was invoked.

    Wraps a real parser, so it still behaves like one.
    """

    inner: Parser[Any, Any, Any]
    calls: int = 0
    inputs: list[Any] = field(default_factory=list)

    def __call__(self, input: Any) -> Success[Any, Any] | Failure[Any, Any]:
        self.calls += 1
        self.inputs.append(input)
        return self.inner.parse(input)


@pytest.fixture
def counting():
    """Factory fixture: ``counting(parser)`` wraps a parser in a CountingParser."""

    def make(parser: Parser[Any, Any, Any]) -> CountingParser:
        return CountingParser(parser)

    return make


@pytest.fixture
def abc() -> Parser[str, str, str]:
    return literal("abc", "expected abc")
