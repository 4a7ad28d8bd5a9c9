"""Interactive confirmation read from the controlling terminal.

Stdin carries the template, so the answer has to come from the TTY.
"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.prompt import Confirm

from servicelogger.logging_config import get_logger

logger = get_logger(__name__)

TTY_PATH = "/dev/tty"


def confirm(prompt: str, *, stream: TextIO | None = None, console: Console | None = None) -> bool:
    """Yes/no confirmation; anything but an explicit yes declines.

    Args:
        prompt: Question shown to the operator
        stream: Answer source (defaults to the controlling terminal)
        console: Console the question is written to
    """
    if stream is not None:
        return _ask(prompt, stream, console or Console(stderr=True))

    try:
        with open(TTY_PATH, "r+", encoding="utf-8") as tty:
            return _ask(prompt, tty, console or Console(file=tty))
    except OSError as e:
        logger.warning("No controlling terminal for confirmation: %s", e)
        return False


def _ask(prompt: str, stream: TextIO, console: Console) -> bool:
    try:
        return Confirm.ask(prompt, console=console, stream=stream, default=False)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return False
