"""Root command: review the pending changes and gate the commit."""

from typing import Optional

import click
import typer

from ..config import OUTPUT_MODES, load_config
from ..exceptions import AICodeReviewError
from ..gate import ask_yes_no
from ..logging_config import setup_logging
from ..orchestrator import handle_error, run_review
from ..shutdown import ExitController
from . import app
from ._common import console, resolve_output_mode


@app.callback(invoke_without_command=True, no_args_is_help=False)
def review(
    ctx: typer.Context,
    web: bool = typer.Option(False, "--web", help="Show findings on the local web dashboard"),
    file: bool = typer.Option(False, "--file", help="Write findings to a Markdown report"),
    console_mode: bool = typer.Option(False, "--console", help="Print findings to the terminal"),
    output_mode: Optional[str] = typer.Option(
        None,
        "--output-mode",
        help="Output mode: console | file | web",
        click_type=click.Choice(list(OUTPUT_MODES), case_sensitive=False),
    ),
    web_port: Optional[int] = typer.Option(
        None, "--web-port", help="Dashboard port (default: 3000)", min=1, max=65535
    ),
    no_browser: bool = typer.Option(
        False, "--no-browser", help="Don't open the dashboard in a browser"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also append log records to this file"
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Review staged changes with an AI model and decide whether to commit.

    Run it from a pre-commit hook. Exit status 0 lets the commit proceed,
    anything else blocks it.

    [bold cyan]Examples:[/bold cyan]

      ai-codereview

      ai-codereview --console

      ai-codereview --web --web-port 3100 --no-browser
    """
    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]AI Code Review[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    mode = resolve_output_mode(web, file, console_mode, output_mode)
    logger = setup_logging(debug=debug, quiet=quiet, log_file=log_file)
    exit_controller = ExitController()

    try:
        config = load_config(
            output_mode=mode,
            web_port=web_port,
            auto_open_browser=False if no_browser else None,
            debug=debug,
        )
    except AICodeReviewError as e:
        logger.error("Configuration error: %s", e)
        exit_controller.exit(handle_error(e, console, ask=ask_yes_no))

    for source in config.loaded_sources:
        logger.debug("Config source: %s (%s)", source.path, source.label)

    try:
        code = run_review(config, console, exit_controller=exit_controller)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        code = 130

    exit_controller.exit(code)
