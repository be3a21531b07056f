"""rpncalc engine: one operation, input validation, stack reduction.

Three pieces, each a method on ``RPNEngine``:

1. ``operate``: one binary operation → NumericResult
2. ``is_valid_input``: cheap syntactic pre-filter over a token list
3. ``process_candidate_stack``: left-to-right reduction → Reduction

None of them raise on bad input; every failure comes back as an ErrorKind.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from rpncalc.backends import ArithmeticBackend, select_backend
from rpncalc.models import ErrorKind, NumericResult, Reduction
from rpncalc.numeric import TokenKind, classify_token, fractional_digits, is_number, parse_number

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 14
OPERATORS = ("+", "-", "*", "/")


class RPNEngine:
    """Arithmetic, validation and reduction over a fixed backend.

    Args:
        backend: Arithmetic backend. Defaults to ``select_backend("auto")``.
        precision: Minimum fractional digits kept in results.
        operators: Supported operator symbols.
    """

    def __init__(
        self,
        backend: Optional[ArithmeticBackend] = None,
        precision: int = DEFAULT_PRECISION,
        operators: Sequence[str] = OPERATORS,
    ) -> None:
        self.backend = backend or select_backend()
        self.precision = precision
        self.operators = tuple(operators)

    # --- Arithmetic ---

    def _scale(self, operator: str, a: str, b: str) -> int:
        """Fractional digits to keep for ``a <operator> b``.

        Widened past the configured precision when the operands carry more
        fractional digits, so no digits the user typed are lost.
        """
        scale = self.precision
        if operator == "/" or ("." not in a and "." not in b):
            return scale
        if operator == "+":
            # One extra place for a carry.
            return max(scale, fractional_digits(a), fractional_digits(b)) + 1
        if operator == "-":
            return max(scale, fractional_digits(a), fractional_digits(b))
        return max(scale, fractional_digits(a) + fractional_digits(b))

    def operate(self, operand1: Any = None, operand2: Any = None, operator: Optional[str] = None) -> NumericResult:
        """Apply ``operator`` to two operands.

        Args:
            operand1: Left operand (numeric string or native number).
            operand2: Right operand.
            operator: One of the engine's operator symbols.

        Returns:
            NumericResult holding the value, or INVALID_OPERATOR,
            INVALID_OPERAND (also for a float result that overflowed to
            inf) or DIVISION_BY_ZERO.
        """
        if not operator or operator not in self.operators:
            return NumericResult.failure(ErrorKind.INVALID_OPERATOR)

        a = parse_number(operand1)
        b = parse_number(operand2)
        if a is None or b is None:
            return NumericResult.failure(ErrorKind.INVALID_OPERAND)

        scale = self._scale(operator, a.expanded(), b.expanded())

        if operator == "+":
            value = self.backend.add(a, b, scale)
        elif operator == "-":
            value = self.backend.subtract(a, b, scale)
        elif operator == "*":
            value = self.backend.multiply(a, b, scale)
        else:
            if self.backend.is_zero(b):
                return NumericResult.failure(ErrorKind.DIVISION_BY_ZERO)
            value = self.backend.divide(a, b, scale)

        # Float overflow gives inf, which can never be an operand again.
        if isinstance(value, float) and not math.isfinite(value):
            logger.debug("Non-finite result for %s %s %s", a.text, operator, b.text)
            return NumericResult.failure(ErrorKind.INVALID_OPERAND)

        return NumericResult.success(value)

    # --- Validation ---

    def is_operator(self, token: Any) -> bool:
        return classify_token(token, self.operators) == TokenKind.OPERATOR

    def is_valid_input(self, tokens: Sequence[Any] = ()) -> bool:
        """Check that ``tokens`` could extend to a valid RPN expression.

        The first two tokens must be numbers (every operator needs two
        operands before it); every later token must be a number or an
        operator. Stack balance is not checked here.
        """
        for i, token in enumerate(tokens):
            kind = classify_token(token, self.operators)
            if kind == TokenKind.UNKNOWN:
                return False
            if i < 2 and kind != TokenKind.NUMBER:
                return False
        return True

    # --- Reduction ---

    def process_candidate_stack(self, tokens: Sequence[Any] = ()) -> Reduction:
        """Reduce ``tokens`` left to right.

        Numbers are pushed as-is. An operator consumes the top two entries
        and pushes the result. On DIVISION_BY_ZERO the whole attempt is
        dropped. On INVALID_OPERAND / INVALID_OPERATOR (e.g. too few
        operands) reduction stops and the untouched remainder, starting at
        the offending operator, is appended to what was reduced so far.

        Returns:
            Reduction with the reduced stack and the error that stopped it,
            if any.
        """
        result: list[Any] = []

        for i, token in enumerate(tokens):
            if is_number(token):
                result.append(token)
                continue

            operand2 = result[-1] if len(result) >= 1 else None
            operand1 = result[-2] if len(result) >= 2 else None

            outcome = self.operate(operand1, operand2, token)

            if outcome.error == ErrorKind.DIVISION_BY_ZERO:
                logger.debug("Division by zero at token %d of %s", i, list(tokens))
                return Reduction(error=outcome.error)

            if outcome.error is not None:
                logger.debug("Reduction stopped at token %d (%s): %s", i, token, outcome.error.value)
                return Reduction(stack=result + list(tokens[i:]), error=outcome.error)

            del result[-2:]
            result.append(outcome.value)

        return Reduction(stack=result)

    def format_value(self, value: Any) -> str:
        """Render a stack entry for display."""
        if isinstance(value, str):
            return value
        return self.backend.format_value(value)
