#!/usr/bin/env python3
"""
Main CLI entry point for mrwant
"""

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from mrwant import __version__
from mrwant.config.settings import get_env_info, get_settings
from mrwant.exceptions import MrWantError
from mrwant.utils.logging_utils import get_log_path, setup_tui_logging
from mrwant.utils.output import console, err_console

app = typer.Typer(add_completion=False, help="Mr. Want - ask a question, get a streamed answer.")

_state = {"verbose": False}


def _launch(model: Optional[str] = None) -> None:
    """Load settings, configure logging and run the interface."""
    try:
        settings = get_settings().with_model(model)
    except MrWantError as e:
        err_console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1) from e

    level = "DEBUG" if _state["verbose"] else settings.log_level
    logger = setup_tui_logging(__name__, level=level)

    from mrwant.ui.app import MrWantApp

    try:
        MrWantApp(settings).run()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error("Interface crashed: %s", e, exc_info=True)
        err_console.print(f"❌ Error: {e}", style="red")
        raise typer.Exit(1) from e


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """
    Mr. Want - answers, immediately.

    [bold]Examples:[/bold]

    Start the interface:
        [cyan]mrwant[/cyan]

    Use a different model:
        [cyan]mrwant run --model gemini-2.5-pro[/cyan]

    Check configuration:
        [cyan]mrwant env[/cyan]
    """
    _state["verbose"] = verbose
    if ctx.invoked_subcommand is None:
        _launch()


@app.command()
def run(
    model: Optional[str] = typer.Option(
        None, "--model", "-m", help="Gemini model to use (overrides MRWANT_MODEL)"
    ),
):
    """Start the Mr. Want interface."""
    _launch(model)


@app.command()
def version():
    """Show mrwant version"""
    typer.echo(f"mrwant version {__version__}")


@app.command()
def env():
    """Show configuration variables and whether they are valid."""
    table = Table(title="Mr. Want configuration")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Valid")
    table.add_column("Description", style="dim")

    for name, info in get_env_info().items():
        value = escape(info["value"]) if info["is_set"] else "[dim](unset)[/dim]"
        valid = "[green]yes[/green]" if info["valid"] else "[red]no[/red]"
        table.add_row(name, value, str(info["default"] or ""), valid, info["description"])

    console.print(table)
    console.print(f"[dim]Log file: {get_log_path()}[/dim]")


def run_cli():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run_cli()
