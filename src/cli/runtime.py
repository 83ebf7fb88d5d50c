"""Wiring for CLI commands.

Why here:
- Commands get their settings, store, provider and prompter from one place,
  so tests can swap the provider or point the store at a temp dir.
- Logging setup and error reporting are shared by every command.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.config_store import JsonConfigStore
from adapters.dominos_api import DominosApiProvider
from cli.prompter import RichPrompter
from core.config import AppSettings
from core.domain.errors import ConfigInvalidError, DominosCliError
from core.interfaces.prompter import Prompter
from core.interfaces.provider import OrderingProvider


@dataclass
class Runtime:
    settings: AppSettings
    console: Console
    store: JsonConfigStore
    provider: OrderingProvider
    prompter: Prompter


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_runtime(settings: AppSettings | None = None) -> Runtime:
    settings = settings or AppSettings()
    console = Console()
    return Runtime(
        settings=settings,
        console=console,
        store=JsonConfigStore(settings.resolve_config_path()),
        provider=DominosApiProvider(settings),
        prompter=RichPrompter(console),
    )


@contextmanager
def reporting_errors(console: Console) -> Iterator[None]:
    """Print a `DominosCliError` with its hint and exit with its code."""

    try:
        yield
    except DominosCliError as exc:
        console.print(Text(f"✗ {exc.message}", style="red"))
        if isinstance(exc, ConfigInvalidError):
            for defect in exc.defects:
                console.print(Text(f"  • {defect}", style="red"))
        if exc.hint:
            console.print(Text(exc.hint, style="dim"))
        raise typer.Exit(int(exc.exit_code)) from exc
