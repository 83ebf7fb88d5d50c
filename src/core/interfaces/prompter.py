"""Terminal I/O contract.

Why a Protocol instead of calling `input()`/`print()`:
- The setup wizard and the order pipeline are interactive loops. Reading
  through an injected prompter makes them testable without a real terminal.
- Rendering/colors stay in the CLI layer.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class Prompter(Protocol):
    def ask(self, question: str, *, secret: bool = False) -> str:
        """Blocks until the user answers; returns the raw answer (may be empty)."""

        ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def hint(self, message: str) -> None:
        """Secondary text: remediation commands, locations, details."""

        ...

    def progress(self, message: str) -> AbstractContextManager[None]:
        """Progress indicator around a single provider call."""

        ...
