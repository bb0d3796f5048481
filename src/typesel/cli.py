"""Typer CLI entry point for typesel."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from typesel import __version__
from typesel.config import TypeselConfig, load_config
from typesel.exceptions import TypeselError
from typesel.selector.engine import TypeSelector
from typesel.selector.walker import SelectionResult

app = typer.Typer(
    name="typesel",
    help="Pick the Go types that need generated JSON marshalers.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


def _error_exit(message: str, hint: str | None = None) -> None:
    """Print a styled error and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    if hint:
        err_console.print(f"[dim]Hint: {hint}[/dim]")
    raise typer.Exit(code=1)


@app.command(name="select")
def select_cmd(
    path: Annotated[Path, typer.Argument(help="A .go file or a package directory")],
    all_structs: Annotated[
        bool, typer.Option("--all", "-a", help="Select every struct unless it is ignored")
    ] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Per-file diagnostics")] = False,
) -> None:
    """Select the types that need generated marshalers."""
    if not path.exists():
        _error_exit(f"'{path}' does not exist.", hint="Pass a .go file or a package directory.")

    try:
        config = load_config(Path.cwd())
        if all_structs:
            config.all_structs = True
        if verbose:
            config.log_level = "DEBUG"

        result = TypeSelector(config).run(path, is_dir=path.is_dir())
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130)
    except TypeselError as exc:
        _error_exit(str(exc))
        return
    except Exception as exc:  # noqa: BLE001
        err_console.print_exception(show_locals=False)
        _error_exit(f"Unexpected error: {exc}")
        return

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)


@app.command(name="config")
def config_cmd() -> None:
    """Show the effective configuration."""
    try:
        config = load_config(Path.cwd())
    except TypeselError as exc:
        _error_exit(str(exc))
        return

    console.print(_config_table(config))


@app.command()
def version() -> None:
    """Print the typesel version."""
    typer.echo(f"typesel {__version__}")


def _print_result(result: SelectionResult) -> None:
    table = Table(title="Selected types", border_style="cyan", header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="bold")

    for i, name in enumerate(result.selected_names, start=1):
        table.add_row(str(i), name)

    console.print(f"[bold]Module path:[/bold] {result.module_path}")
    console.print(f"[bold]Package:[/bold] {result.module_name}")
    if result.selected_names:
        console.print(table)
    else:
        console.print("[yellow]No types selected.[/yellow]")


def _config_table(config: TypeselConfig) -> Table:
    table = Table(title="typesel configuration", border_style="cyan", header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Project", str(config.project_dir))
    table.add_row("All structs", "[green]yes[/green]" if config.all_structs else "no")
    table.add_row("Log level", config.log_level)
    table.add_row("Go command", config.go_command)
    table.add_row("GOPATH", config.gopath or "[dim]from go env[/dim]")
    return table
