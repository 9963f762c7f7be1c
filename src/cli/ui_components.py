"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- `RichPromotionUI` is the terminal implementation of `PromotionUI`; the
  workflow never touches rich or typer prompts directly.
"""

from __future__ import annotations

from typing import ContextManager

import typer
from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.text import Text

from core.errors import AppshipError


class RichPromotionUI:
    """Console output, confirmation prompt and spinner backed by rich/typer."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def log(self, message: str) -> None:
        self._console.print(message, highlight=False)

    def confirm(self, prompt: str) -> bool:
        return typer.confirm(prompt, default=False)

    def spinner(self, label: str) -> ContextManager[Status]:
        return self._console.status(label, spinner="dots")


def print_error(console: Console, exc: BaseException) -> None:
    """Print an error message, preferring the styled version when one exists."""

    renderable = exc.renderable if isinstance(exc, AppshipError) else None
    if renderable is None:
        renderable = Text(str(exc) or exc.__class__.__name__)
    console.print(Text("Error: ", style="bold red"), end="")
    console.print(renderable, highlight=False)


def print_cancelled(console: Console, message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")
