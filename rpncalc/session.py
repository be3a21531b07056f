"""rpncalc session: owns the committed stack and the interactive loop.

Data flow per input line:
1. Quit on an empty line or "q"
2. Candidate = committed stack + the line's tokens
3. Validate the candidate (reject on failure, stack untouched)
4. A lone number is committed directly
5. Anything else is reduced; commit only a reduction with no operators left
6. Render the response plus the current expression
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from rich.console import Console

from rpncalc.engine import RPNEngine
from rpncalc.models import Response, ResponseKind
from rpncalc.numeric import is_number, split_tokens

logger = logging.getLogger(__name__)

QUIT_COMMAND = "q"
DEFAULT_PROMPT = "> "

_RULE = "-" * 50


@dataclass
class Session:
    """One user's calculator session.

    Each session owns its stack; nothing is shared between sessions.
    """

    engine: RPNEngine = field(default_factory=RPNEngine)
    stack: list[Any] = field(default_factory=list)

    @property
    def expression(self) -> str:
        """The committed stack joined by spaces."""
        return " ".join(self.engine.format_value(t) for t in self.stack)

    def reset(self) -> None:
        self.stack = []

    def _respond(self, kind: ResponseKind, value: Any = None) -> Response:
        shown = self.engine.format_value(value) if value is not None else None
        return Response(kind=kind, value=shown, expression=self.expression)

    def submit(self, line: str) -> Response:
        """Process one line of input against the committed stack.

        Args:
            line: Raw input line (may carry surrounding whitespace).

        Returns:
            Response describing the outcome. The stack is only changed for
            RESULT (commit) and DIVISION_BY_ZERO (reset).
        """
        line = line.strip()
        if not line or line == QUIT_COMMAND:
            return self._respond(ResponseKind.QUIT)

        candidate = list(self.stack) + split_tokens(line)

        if not self.engine.is_valid_input(candidate):
            logger.debug("Rejected invalid candidate: %s", candidate)
            return self._respond(ResponseKind.INVALID_INPUT)

        if is_number(line):
            self.stack = candidate
            logger.debug("Committed operand %s", line)
            return self._respond(ResponseKind.RESULT, line)

        reduction = self.engine.process_candidate_stack(candidate)

        if reduction.division_by_zero:
            logger.info("Division by zero; clearing stack")
            self.reset()
            return self._respond(ResponseKind.DIVISION_BY_ZERO)

        if any(self.engine.is_operator(t) for t in reduction.stack):
            logger.debug("Not enough operands: %s", reduction.stack)
            return self._respond(ResponseKind.NOT_ENOUGH_OPERANDS)

        self.stack = reduction.stack
        logger.debug("Committed stack: %s", self.expression)
        return self._respond(ResponseKind.RESULT, self.stack[-1] if self.stack else None)


# --- Rendering ---

def render_banner(console: Console, operators: tuple[str, ...]) -> None:
    """Print the welcome message and instructions."""
    ops = ", ".join(operators)
    console.print()
    console.print(_RULE, markup=False)
    console.print("[bold]Welcome to our command-line Reverse Polish Notation calculator![/bold]")
    console.print()
    console.print(
        'Type in what you want calculated (in Reverse Polish Notation) and press "enter" '
        "to see the result. E.g.: 5 9 1 - +.",
        soft_wrap=True,
    )
    console.print()
    console.print(f"Supported operations: {ops}.", markup=False)
    console.print()
    console.print(_RULE, markup=False)
    console.print()
    console.print('To exit, type "q" and press "enter", or just press "enter".')
    console.print()


def render_response(response: Response, console: Console, operators: tuple[str, ...]) -> None:
    """Print a response the way the interactive loop shows it."""
    if response.kind == ResponseKind.RESULT:
        console.print(response.value, markup=False, highlight=False, soft_wrap=True)
    elif response.kind == ResponseKind.INVALID_INPUT:
        console.print()
        console.print("[red]Invalid input.[/red]")
        console.print()
        console.print("Only allowed:")
        console.print("- numbers (integers or floats, positive or negative, exponential part allowed)", soft_wrap=True)
        console.print(f"- operators ({', '.join(operators)})", markup=False)
        console.print("- spaces")
        console.print()
        console.print(
            "Please also make sure that each operation has exactly two operands "
            "(both operands should precede their operator).",
            soft_wrap=True,
        )
    elif response.kind == ResponseKind.DIVISION_BY_ZERO:
        console.print()
        console.print(
            "[red]Division by zero encountered.[/red] We're starting over. Please type in your input.",
            soft_wrap=True,
        )
    elif response.kind == ResponseKind.NOT_ENOUGH_OPERANDS:
        console.print()
        console.print("[red]Invalid input: too many operations, not enough operands.[/red]", soft_wrap=True)
        console.print(
            "Please make sure that each operation has exactly two operands "
            "(both operands should precede their operator).",
            soft_wrap=True,
        )

    if response.expression:
        console.print()
        console.print(f"Your current expression: {response.expression}.", markup=False, highlight=False, soft_wrap=True)
    console.print()


def run_session(
    session: Session,
    console: Console,
    read_line: Optional[Callable[[str], str]] = None,
    prompt: str = DEFAULT_PROMPT,
    banner: bool = True,
) -> Session:
    """Run the interactive loop until the user quits or input ends.

    Args:
        session: Session whose stack is read and updated.
        console: Rich Console for all output.
        read_line: Callable taking the prompt and returning one line.
            Defaults to console.input. EOFError ends the session.
        prompt: Prompt printed before each line.
        banner: Whether to print the welcome banner first.

    Returns:
        The session, with its final stack.
    """
    read = read_line or (lambda p: console.input(p, markup=False))
    operators = session.engine.operators

    if banner:
        render_banner(console, operators)

    logger.info("Session started (backend=%s, precision=%d)", session.engine.backend.name, session.engine.precision)

    while True:
        try:
            line = read(prompt)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        response = session.submit(line)
        if response.kind == ResponseKind.QUIT:
            break
        render_response(response, console, operators)

    logger.info("Session ended; final expression: %r", session.expression)
    return session
