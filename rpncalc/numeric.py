"""Numeric literal grammar and token classification.

A number token is an optional leading minus, digits with an optional
fractional part (or a bare fractional part), and an optional exponent:
``.7``, ``-2.98``, ``1.678e+32``, ``70e-54``. Parsing returns a
``NumberLiteral`` or ``None``. The engine, the validator and the reducer
all go through ``parse_number`` so they agree on what counts as numeric.

Exponents are bounded by ``MAX_EXPONENT`` in either direction; beyond that
a literal would expand to an unbounded digit string, so it is not a number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional

_NUMBER_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE]([+-]?\d+))?$")

MAX_EXPONENT = 10_000


class TokenKind(str, Enum):
    """Classification of a single input token."""

    NUMBER = "number"
    OPERATOR = "operator"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NumberLiteral:
    """A token that matched the numeric grammar."""

    text: str

    @property
    def has_exponent(self) -> bool:
        return "e" in self.text or "E" in self.text

    def expanded(self) -> str:
        """Plain decimal expansion of the literal.

        Exponential forms are written out in full (``5e2`` -> ``500``,
        ``-138e-2`` -> ``-1.38``); everything else keeps its original text
        so large or very precise literals lose nothing.
        """
        if not self.has_exponent:
            return self.text
        return format(Decimal(self.text), "f")

    def to_decimal(self) -> Decimal:
        return Decimal(self.text)

    def to_float(self) -> float:
        return float(self.text)


def _token_text(token: Any) -> Optional[str]:
    """String form of a token, or None for things that can never be numbers."""
    if token is None or isinstance(token, bool):
        return None
    if isinstance(token, str):
        return token
    if isinstance(token, Decimal):
        if not token.is_finite() or abs(token.as_tuple().exponent) > MAX_EXPONENT:
            return None
        return format(token, "f")
    if isinstance(token, (int, float)):
        return repr(token)
    return None


def parse_number(token: Any) -> Optional[NumberLiteral]:
    """Parse a token against the numeric grammar.

    Accepts strings as typed by the user as well as native numbers (ints,
    floats, Decimals) produced by an arithmetic backend.

    Args:
        token: The candidate token.

    Returns:
        NumberLiteral when the token is numeric, None otherwise.
    """
    text = _token_text(token)
    if text is None:
        return None
    match = _NUMBER_RE.match(text)
    if not match:
        return None
    if match.group(1) is not None and not _exponent_in_range(match.group(1)):
        return None
    return NumberLiteral(text)


def _exponent_in_range(exponent: str) -> bool:
    digits = exponent.lstrip("+-").lstrip("0")
    # Length check first: int() refuses very long digit strings.
    if len(digits) > len(str(MAX_EXPONENT)):
        return False
    return int(digits or "0") <= MAX_EXPONENT


def is_number(token: Any) -> bool:
    return parse_number(token) is not None


def classify_token(token: Any, operators: Iterable[str]) -> TokenKind:
    """Classify a token as a number, one of ``operators``, or unknown."""
    if is_number(token):
        return TokenKind.NUMBER
    if isinstance(token, str) and token in operators:
        return TokenKind.OPERATOR
    return TokenKind.UNKNOWN


def fractional_digits(text: str) -> int:
    """Number of digits after the decimal point in a plain decimal string."""
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1])


def trim_trailing_zeros(text: str) -> str:
    """Drop trailing fractional zeros, then a dangling decimal point.

    ``4560000.00`` -> ``4560000``, ``0.6250`` -> ``0.625``. Strings without a
    decimal point are returned unchanged. A negative zero becomes ``0``.
    """
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def split_tokens(line: str) -> list[str]:
    """Split an input line on whitespace, dropping empty pieces (but not "0")."""
    return line.split()
