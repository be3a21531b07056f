"""CLI for the rpncalc Reverse Polish Notation calculator.

Usage:
    python -m rpncalc repl                       # Interactive session
    python -m rpncalc repl --backend float       # Native float arithmetic
    python -m rpncalc eval "5 9 1 - /"           # One-shot evaluation
    python -m rpncalc check 3 4 + e20            # Validate tokens only
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from rpncalc.backends import select_backend
from rpncalc.config import ConfigError, Settings, load_settings
from rpncalc.engine import RPNEngine
from rpncalc.logging_config import setup_logging
from rpncalc.session import Session, render_response, run_session

app = typer.Typer(
    name="rpncalc",
    help="Interactive Reverse Polish Notation calculator",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _configure(
    precision: Optional[int],
    backend: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
) -> Settings:
    """Resolve settings and set up logging, exiting 1 on bad values."""
    try:
        settings = load_settings(precision=precision, backend=backend, log_level=log_level)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    setup_logging(settings.log_level_number, log_file)
    return settings


def _build_session(settings: Settings) -> Session:
    engine = RPNEngine(
        backend=select_backend(settings.backend),
        precision=settings.precision,
        operators=settings.operators,
    )
    return Session(engine=engine)


@app.command("repl")
def cmd_repl(
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Minimum fractional digits (default 14)"),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Backend: auto, decimal, float"),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the welcome message"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
) -> None:
    """Start an interactive session. Empty line or "q" quits."""
    settings = _configure(precision, backend, log_level, log_file)
    session = _build_session(settings)
    run_session(session, console, prompt=settings.prompt, banner=not no_banner)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="RPN expression, e.g. '5 9 1 - /'"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Minimum fractional digits (default 14)"),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="Backend: auto, decimal, float"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
) -> None:
    """Evaluate one expression in a fresh session and print the result."""
    settings = _configure(precision, backend, log_level, None)
    session = _build_session(settings)

    if not expression.strip():
        err_console.print("[red]Error:[/red] empty expression")
        raise typer.Exit(1)

    response = session.submit(expression)
    if not response.committed:
        render_response(response, err_console, settings.operators)
        raise typer.Exit(1)

    if len(session.stack) > 1:
        err_console.print(f"[yellow]Unfinished expression:[/yellow] {session.expression}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    console.print(response.value, markup=False, highlight=False, soft_wrap=True)


@app.command("check")
def cmd_check(
    tokens: list[str] = typer.Argument(help="Tokens to validate"),
) -> None:
    """Run only the syntactic validator over TOKENS."""
    engine = RPNEngine(backend=select_backend())
    if engine.is_valid_input(tokens):
        console.print("[green]valid[/green]")
        return
    console.print("[red]invalid[/red]")
    raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
