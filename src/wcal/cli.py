"""
wcal command-line interface.

One-shot mode evaluates each argument in order; ``-i`` and ``-f`` switch
between integer and float mode for the arguments that follow::

    wcal 1+2 -f 7/2 -i 7/2

Without expressions, wcal starts an interactive loop.
"""

from __future__ import annotations

import logging
import math
import sys
import warnings
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console

from wcal._version import get_version
from wcal.config import CalculatorConfig, apply_overrides, find_config, load_config
from wcal.core.calculator import Mode, evaluate
from wcal.core.errors import EvaluationFault, TruncatedDivisionWarning, WcalError

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate integer arithmetic as i128 or f64.",
    add_completion=False,
)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

MODE_SWITCHES: dict[str, Mode] = {"-i": Mode.INTEGER, "-f": Mode.FLOAT}

REPL_COMMANDS: dict[str, Mode] = {
    "i": Mode.INTEGER,
    "i128": Mode.INTEGER,
    "f": Mode.FLOAT,
    "f64": Mode.FLOAT,
}

HELP_TEXT = """\
i, i128\tEnter i128 mod
f, f64\tEnter f64 mod
h, help\tShow this help
q, quit\tQuit"""


def _prompt(mode: Mode) -> str:
    return "i> " if mode == Mode.INTEGER else "f> "


def format_result(value: int | float) -> str:
    """Render a result the way the original calculator prints it.

    Floats never use an exponent, drop a zero fraction, keep the sign of -0,
    and spell out inf, -inf, and NaN."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    # Shortest round-trip digits, positional: 1e-05 prints as 0.00001, -0.0 as -0
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def run_expression(source: str, mode: Mode, config: CalculatorConfig) -> bool:
    """Evaluate and print one expression. Returns False on a fault."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", TruncatedDivisionWarning)
        try:
            result = evaluate(source, mode, max_depth=config.max_depth)
        except WcalError as e:
            console.print(f"Error: {e.message}", markup=False)
            return True
        except EvaluationFault as e:
            logger.debug("Evaluation of %r aborted: %s", source, e)
            err_console.print(f"Error: {e}", markup=False)
            return False
        finally:
            for w in caught:
                if issubclass(w.category, TruncatedDivisionWarning):
                    err_console.print(f"Warning: {w.message}", markup=False)

    console.print(format_result(result), markup=False)
    return True


def run_batch(args: list[str], mode: Mode, config: CalculatorConfig) -> int:
    """One-shot mode. Stops at the first fault and returns the exit code."""
    for arg in args:
        if arg in MODE_SWITCHES:
            mode = MODE_SWITCHES[arg]
            continue
        console.print(f"{_prompt(mode)}{arg}", markup=False)
        if not run_expression(arg, mode, config):
            return 1
    return 0


def run_interactive(mode: Mode, config: CalculatorConfig) -> None:
    """Read-eval-print loop until quit or end of input."""
    while True:
        try:
            line = console.input(_prompt(mode), markup=False)
        except EOFError:
            console.print()
            return

        line = line.strip()
        if not line:
            continue

        if line in REPL_COMMANDS:
            mode = REPL_COMMANDS[line]
            console.print(f"Enter {mode.value} mod")
        elif line in ("q", "quit"):
            console.print("Bye!")
            return
        elif line in ("h", "help"):
            console.print(HELP_TEXT, markup=False)
        else:
            run_expression(line, mode, config)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"wcal version {get_version()}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def calculate(
    ctx: typer.Context,
    float_mode: bool = typer.Option(False, "--float", help="Start in f64 mode"),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        help="Configuration file (default: ./wcal.toml)",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Evaluate EXPR arguments, or start an interactive session if none are given.

    Use -i and -f between expressions to switch integer and float mode.
    """
    try:
        config = load_config(find_config(config_path))
        if log_level is not None:
            config = apply_overrides(config, log_level=log_level)
    except WcalError as e:
        err_console.print(f"Error: {e.message}", markup=False)
        raise typer.Exit(code=2) from e

    _setup_logging(config.log_level)

    mode = Mode.FLOAT if float_mode else config.mode
    args = list(ctx.args)
    logger.debug("Starting in %s mode with %d arguments", mode, len(args))

    if args:
        raise typer.Exit(code=run_batch(args, mode, config))

    run_interactive(mode, config)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
