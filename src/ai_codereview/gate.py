"""Interactive yes/no confirmation on the controlling terminal.

VCS hooks run with standard input redirected, so the question goes to the
terminal device itself (``/dev/tty``, or ``CON`` on Windows) instead of
``sys.stdin``.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import IO, Iterator, Optional, Tuple

from .exceptions import TerminalUnavailableError
from .logging_config import get_logger

logger = get_logger(__name__)

AFFIRMATIVE = ("y", "yes")


def is_affirmative(answer: Optional[str]) -> bool:
    """Only ``y``/``yes`` (any case, surrounding whitespace ignored) count."""
    if answer is None:
        return False
    return answer.strip().lower() in AFFIRMATIVE


def terminal_device() -> str:
    return "CON" if os.name == "nt" else "/dev/tty"


@contextmanager
def open_terminal(path: Optional[str] = None) -> Iterator[Tuple[IO[str], IO[str]]]:
    """Open the terminal for one exchange; both ends are closed on exit.

    Raises:
        TerminalUnavailableError: If the device cannot be opened
    """
    device = path or terminal_device()
    try:
        reader = open(device, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise TerminalUnavailableError(device, str(e))
    try:
        writer = open(device, "a", encoding="utf-8")
    except OSError as e:
        reader.close()
        raise TerminalUnavailableError(device, str(e))

    try:
        yield reader, writer
    finally:
        writer.close()
        reader.close()


def ask_yes_no(
    question: str,
    terminal_path: Optional[str] = None,
    default_when_unavailable: bool = False,
) -> bool:
    """Ask *question* on the terminal and return whether the answer is yes.

    Empty input and EOF are a no. When no terminal can be opened a warning
    is logged and *default_when_unavailable* is returned.
    """
    try:
        with open_terminal(terminal_path) as (reader, writer):
            writer.write(f"\n{question} ")
            writer.flush()
            answer = reader.readline()
    except TerminalUnavailableError as e:
        logger.warning(
            "%s; skipping confirmation and answering %s",
            e,
            "yes" if default_when_unavailable else "no",
        )
        return default_when_unavailable
    return is_affirmative(answer)
