"""
climbcalc CLI.

Commands:
- eval: read one expression, print its tree and its value
- tokens: show the token sequence for an expression
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.highlighter import JSONHighlighter
from rich.table import Table

from climbcalc._version import get_version
from climbcalc.core.errors import CalcError
from climbcalc.core.expression_lang import evaluate, parse_expr, tokenize
from climbcalc.core.ir.expressions import dump_tree, format_number
from climbcalc.core.settings import CalcSettings, load_settings

console = Console()
err_console = Console(stderr=True)
json_highlighter = JSONHighlighter()


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"climbcalc version {get_version()}")
        typer.echo(f"  Python: {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="climbcalc - evaluate single-line arithmetic expressions (+ - * / ^)",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """climbcalc CLI main callback for global options."""
    pass


def _load_settings(config: Path | None) -> CalcSettings:
    try:
        return load_settings(config)
    except CalcError as e:
        err_console.print(f"Config error: {e}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


def _configure_logging(settings: CalcSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("climbcalc").setLevel(level)


def _print_error(error: CalcError) -> None:
    err_console.print(f"Error: {error}", markup=False, highlight=False, soft_wrap=True)


@app.command(name="eval")
def eval_command(
    expression: str | None = typer.Argument(
        None, help="Expression to evaluate (prompted for when omitted)"
    ),
    tree: bool | None = typer.Option(
        None, "--tree/--no-tree", help="Print the expression tree before the result"
    ),
    indent: int | None = typer.Option(
        None, "--indent", "-i", min=0, help="Indentation of the tree dump"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to climbcalc.toml"
    ),
) -> None:
    """Evaluate one expression and print its tree and result."""
    settings = _load_settings(config)
    _configure_logging(settings, verbose)

    show_tree = settings.show_tree if tree is None else tree
    tree_indent = settings.tree_indent if indent is None else indent

    if expression is None:
        expression = typer.prompt(
            settings.prompt, default="", show_default=False, prompt_suffix=""
        )

    if not expression.strip():
        err_console.print("Error: No expression inputted!", markup=False)
        raise typer.Exit(code=1)

    try:
        node = parse_expr(expression)
        if show_tree:
            # Already JSON text; print_json would re-parse it recursively
            console.print(json_highlighter(dump_tree(node, tree_indent)), soft_wrap=True)
        result = evaluate(node)
    except CalcError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    console.print(f"Result: {format_number(result)}", markup=False, highlight=False)


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the tokens the lexer produces for an expression."""
    try:
        tokens = tokenize(expression)
    except CalcError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    table = Table(title=f"Tokens for {expression!r}")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Value")
    table.add_column("Offset", justify="right")
    for i, tok in enumerate(tokens):
        value = format_number(tok.value) if isinstance(tok.value, float) else str(tok.value)
        table.add_row(str(i), str(tok.kind), value, str(tok.pos))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
