"""rpncalc: interactive Reverse Polish Notation calculator.

Type RPN a line at a time; the calculator keeps a running stack, reduces
whatever can be reduced with exact decimal arithmetic, and holds on to
pending operands until more input arrives.

Usage:
    python -m rpncalc repl                    # Interactive session
    python -m rpncalc eval "5 9 1 - /"        # One-shot evaluation
    python -m rpncalc eval -- "-3 -2 * 5 +"   # Leading minus needs "--"
    python -m rpncalc check 3 4 + e20         # Validate tokens only
"""

from rpncalc.engine import RPNEngine
from rpncalc.models import ErrorKind, NumericResult, Reduction, Response, ResponseKind
from rpncalc.session import Session

__all__ = [
    "ErrorKind",
    "NumericResult",
    "RPNEngine",
    "Reduction",
    "Response",
    "ResponseKind",
    "Session",
]
