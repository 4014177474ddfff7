"""CLI entry point: registers the review command and config subcommands."""

import typer

from .. import __version__  # noqa: F401
from ._common import console  # noqa: F401

app = typer.Typer(
    name="ai-codereview",
    help="AI Code Review - pre-commit review gate for git and svn",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .review import review as _review_callback  # noqa: F401, E402
from .config_cmds import config_help as _config_help  # noqa: F401, E402
from .config_cmds import init_config as _init_config  # noqa: F401, E402
from .config_cmds import init_node_config as _init_node_config  # noqa: F401, E402
from .config_cmds import show_help as _show_help  # noqa: F401, E402


def main() -> None:
    """Console-script entry point."""
    app()
