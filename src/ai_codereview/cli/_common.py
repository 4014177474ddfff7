"""Shared CLI helpers."""

from typing import Optional

import typer
from rich.console import Console

console = Console()


def resolve_output_mode(
    web: bool = False,
    file: bool = False,
    console_flag: bool = False,
    output_mode: Optional[str] = None,
) -> Optional[str]:
    """Collapse the mode flags into one output mode (None = use config).

    Raises:
        typer.BadParameter: If more than one mode is requested
    """
    requested = [
        mode
        for mode, flag in (("web", web), ("file", file), ("console", console_flag))
        if flag
    ]
    if output_mode:
        requested.append(output_mode.lower())
    if len(set(requested)) > 1:
        raise typer.BadParameter(
            f"conflicting output modes: {', '.join(sorted(set(requested)))}"
        )
    return requested[0] if requested else None
