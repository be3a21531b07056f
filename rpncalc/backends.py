"""Arithmetic backends for the rpncalc engine.

Each backend implements the four binary operations on parsed number
literals. The decimal backend is exact up to the requested scale and
returns plain decimal strings; the float backend uses native floats.
A backend is chosen once per engine via ``select_backend`` and never
mixed within one evaluation.
"""

from __future__ import annotations

import logging
from decimal import MAX_EMAX, MIN_EMIN, ROUND_DOWN, Context, Decimal
from enum import Enum

from rpncalc.models import Value
from rpncalc.numeric import NumberLiteral, trim_trailing_zeros

logger = logging.getLogger(__name__)


class BackendName(str, Enum):
    """Selectable arithmetic backends."""

    AUTO = "auto"
    DECIMAL = "decimal"
    FLOAT = "float"


class ArithmeticBackend:
    """Interface every backend implements.

    ``scale`` is the number of fractional digits to keep; backends that
    cannot honor it (native floats) ignore it.
    """

    name = "abstract"

    def add(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> Value:
        raise NotImplementedError

    def subtract(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> Value:
        raise NotImplementedError

    def multiply(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> Value:
        raise NotImplementedError

    def divide(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> Value:
        raise NotImplementedError

    def is_zero(self, a: NumberLiteral) -> bool:
        raise NotImplementedError

    def format_value(self, value: Value) -> str:
        """Render a value for display."""
        return str(value)


def _context(prec: int) -> Context:
    """A truncating context wide enough for ``prec`` significant digits."""
    return Context(prec=max(prec, 28), rounding=ROUND_DOWN, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


class DecimalBackend(ArithmeticBackend):
    """Fixed-scale decimal arithmetic.

    Results are truncated (never rounded) to ``scale`` fractional digits and
    rendered with trailing zeros trimmed, so ``1.52 * 3000000`` gives
    ``4560000`` and ``5 / 8`` gives ``0.625``.
    """

    name = BackendName.DECIMAL.value

    def _render(self, value: Decimal, scale: int) -> str:
        quantum = Decimal(1).scaleb(-scale)
        ctx = _context(max(value.adjusted(), 0) + scale + 2)
        truncated = value.quantize(quantum, rounding=ROUND_DOWN, context=ctx)
        return trim_trailing_zeros(format(truncated, "f"))

    @staticmethod
    def _operands(a: NumberLiteral, b: NumberLiteral) -> tuple[Decimal, Decimal]:
        return Decimal(a.expanded()), Decimal(b.expanded())

    def _exact_sum_context(self, x: Decimal, y: Decimal) -> Context:
        top = max(x.adjusted(), y.adjusted()) + 2
        bottom = min(x.as_tuple().exponent, y.as_tuple().exponent)
        return _context(top - bottom)

    def add(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> str:
        x, y = self._operands(a, b)
        return self._render(self._exact_sum_context(x, y).add(x, y), scale)

    def subtract(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> str:
        x, y = self._operands(a, b)
        return self._render(self._exact_sum_context(x, y).subtract(x, y), scale)

    def multiply(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> str:
        x, y = self._operands(a, b)
        ctx = _context(_digits(x) + _digits(y))
        return self._render(ctx.multiply(x, y), scale)

    def divide(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> str:
        x, y = self._operands(a, b)
        # Enough significant digits to reach 10**-scale; the quotient is
        # truncated here and again by the quantize in _render.
        ctx = _context(x.adjusted() - y.adjusted() + scale + 2)
        return self._render(ctx.divide(x, y), scale)

    def is_zero(self, a: NumberLiteral) -> bool:
        return a.to_decimal().is_zero()


class FloatBackend(ArithmeticBackend):
    """Native floating-point arithmetic. Values stay floats end to end."""

    name = BackendName.FLOAT.value

    def add(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> float:
        return a.to_float() + b.to_float()

    def subtract(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> float:
        return a.to_float() - b.to_float()

    def multiply(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> float:
        return a.to_float() * b.to_float()

    def divide(self, a: NumberLiteral, b: NumberLiteral, scale: int) -> float:
        return a.to_float() / b.to_float()

    def is_zero(self, a: NumberLiteral) -> bool:
        return a.to_float() == 0.0

    def format_value(self, value: Value) -> str:
        if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return str(value)


_BACKENDS: dict[BackendName, type[ArithmeticBackend]] = {
    BackendName.DECIMAL: DecimalBackend,
    BackendName.FLOAT: FloatBackend,
}


def select_backend(name: BackendName | str = BackendName.AUTO) -> ArithmeticBackend:
    """Build the backend for ``name``.

    ``auto`` picks the decimal backend; the float backend is used only when
    asked for explicitly.

    Raises:
        ValueError: If ``name`` is not a known backend.
    """
    choice = BackendName(name)
    if choice == BackendName.AUTO:
        choice = BackendName.DECIMAL
    backend = _BACKENDS[choice]()
    logger.debug("Arithmetic backend: %s (requested %s)", backend.name, BackendName(name).value)
    return backend
