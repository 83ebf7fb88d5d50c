"""Configuration store contract."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConfigStore(Protocol):
    def exists(self) -> bool: ...

    def load(self) -> dict[str, Any] | None: ...

    def save(self, doc: dict[str, Any]) -> None: ...

    def location(self) -> str: ...
