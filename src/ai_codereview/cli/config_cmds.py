"""Config subcommands: create templates and explain the lookup order."""

from pathlib import Path
from typing import Optional

import typer

from ..config import (
    describe_sources,
    installation_config_path,
    user_config_path,
    write_config_template,
)
from ..exceptions import ConfigTemplateError
from . import app
from ._common import console


def _create_template(path: Optional[Path], location: str, force: bool) -> None:
    if path is None:
        console.print(f"[red]Cannot determine the {location} directory[/red]")
        raise typer.Exit(1)
    if path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {path}")
        console.print("[dim]Use --force to overwrite it[/dim]")
        raise typer.Exit(1)

    try:
        write_config_template(path, location)
    except ConfigTemplateError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Created config file:[/green] {path}")
    console.print("Edit it and set API_KEY to your review service key.")


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create the user-global config file (~/.ai-codereview.env)."""
    _create_template(user_config_path(), "user home", force)


@app.command("init-node-config")
def init_node_config(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create the installation-global config file (shared by all users)."""
    _create_template(installation_config_path(), "Python installation", force)


@app.command("config-help")
def config_help() -> None:
    """Explain where configuration is read from."""
    console.print("[bold]AI Code Review configuration[/bold]")
    console.print()
    console.print("[bold]Config files, highest precedence first:[/bold]")
    console.print("  0. process environment (API_KEY, AI_MODEL, AI_OUTPUT_MODE, ...)")
    for rank, source in describe_sources():
        marker = "[green]found[/green]" if source.exists else "[dim]missing[/dim]"
        console.print(f"  {rank}. {source.path} ({source.label}) {marker}")
    console.print()
    console.print("[bold]Quick start:[/bold]")
    console.print("  1. Create a user config:          ai-codereview init-config")
    console.print("  2. Or one for this installation:  ai-codereview init-node-config")
    console.print("  3. Set API_KEY in the file")
    console.print("  4. Run ai-codereview from your pre-commit hook")
    console.print()
    console.print("[dim]A .env file in the project root overrides the global files.[/dim]")


@app.command("help")
def show_help(ctx: typer.Context) -> None:
    """Show usage."""
    typer.echo(ctx.parent.get_help() if ctx.parent is not None else ctx.get_help())
