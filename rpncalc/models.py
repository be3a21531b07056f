"""Data models for the rpncalc engine and session.

ErrorKind, NumericResult, Reduction, ResponseKind, Response: the typed
structures that flow through engine → session → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

# A value produced by an arithmetic backend: a decimal string from the
# decimal backend, a float from the float backend.
Value = Union[str, float]


class ErrorKind(str, Enum):
    """Named failure outcomes of an arithmetic operation."""

    DIVISION_BY_ZERO = "E_DIVISION_BY_ZERO"
    INVALID_OPERAND = "E_INVALID_OPERAND"
    INVALID_OPERATOR = "E_INVALID_OPERATOR"


@dataclass(frozen=True)
class NumericResult:
    """Outcome of a single operation: a value, or an error kind, never both."""

    value: Optional[Value] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Value) -> NumericResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> NumericResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __float__(self) -> float:
        if self.error is not None:
            raise ValueError(f"no numeric value: {self.error.value}")
        return float(self.value)


@dataclass
class Reduction:
    """Outcome of reducing a candidate stack.

    ``error`` is None for a clean reduction. DIVISION_BY_ZERO aborts the
    whole attempt (``stack`` is empty). INVALID_OPERAND / INVALID_OPERATOR
    mean the reducer bailed out at an operator: ``stack`` then holds the
    values reduced so far followed by the untouched remainder of the input.
    """

    stack: list[Any] = field(default_factory=list)
    error: Optional[ErrorKind] = None

    @property
    def division_by_zero(self) -> bool:
        return self.error == ErrorKind.DIVISION_BY_ZERO

    @property
    def complete(self) -> bool:
        return self.error is None


class ResponseKind(str, Enum):
    """What the session did with one line of input."""

    RESULT = "result"
    INVALID_INPUT = "invalid-input"
    DIVISION_BY_ZERO = "division-by-zero"
    NOT_ENOUGH_OPERANDS = "not-enough-operands"
    QUIT = "quit"


@dataclass
class Response:
    """The session's answer to one line, ready for rendering."""

    kind: ResponseKind
    value: Optional[Value] = None
    expression: str = ""

    @property
    def committed(self) -> bool:
        """True when the line was accepted and the stack updated."""
        return self.kind == ResponseKind.RESULT
