"""Terminal rendering of service log templates."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown

from servicelogger.templates import Template


def render_markdown(text: str, *, width: int | None = None) -> str:
    """Render markdown to terminal text with ANSI styling where supported."""
    console = Console(width=width, record=False)
    with console.capture() as capture:
        console.print(Markdown(text))
    return capture.get()


def render_template(template: Template, *, width: int | None = None) -> str:
    return render_markdown(template.to_markdown(), width=width)
