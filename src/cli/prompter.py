"""Rich implementation of the core `Prompter` contract."""

from __future__ import annotations

from contextlib import AbstractContextManager

from rich.console import Console
from rich.text import Text


class RichPrompter:
    """Terminal prompter.

    Messages are wrapped in `Text` so user-provided values (addresses, preset
    names, provider messages) are never parsed as Rich markup.
    """

    def __init__(self, console: Console) -> None:
        self._console = console

    def ask(self, question: str, *, secret: bool = False) -> str:
        return self._console.input(Text(question, style="bold"), password=secret)

    def info(self, message: str) -> None:
        self._console.print(Text(message))

    def success(self, message: str) -> None:
        self._console.print(Text(f"✓ {message}", style="green"))

    def warn(self, message: str) -> None:
        self._console.print(Text(message, style="yellow"))

    def error(self, message: str) -> None:
        self._console.print(Text(f"✗ {message}", style="red"))

    def hint(self, message: str) -> None:
        self._console.print(Text(message, style="dim"))

    def progress(self, message: str) -> AbstractContextManager[None]:
        return self._console.status(Text(message), spinner="dots")
