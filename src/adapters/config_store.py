"""JSON configuration store.

Why JSON:
- The user edits the document by hand (`dominos config edit`), so it stays a
  plain, stable, indented file.
- Saves go through a temp file and an atomic rename, so a crash never leaves a
  half-written config behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from core.domain.errors import ConfigStorageError

logger = logging.getLogger(__name__)


class JsonConfigStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def location(self) -> str:
        return str(self._path)

    def _read(self) -> dict[str, Any] | None:
        if not self._path.is_file():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigStorageError(f"Could not read {self._path}: {exc}") from exc
        if not raw.strip():
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigStorageError(
                f"Config file is not valid JSON ({exc.msg} at line {exc.lineno})",
                hint="Fix it with: dominos config edit",
            ) from exc
        if not isinstance(data, dict):
            raise ConfigStorageError(
                "Config file must contain a JSON object",
                hint="Fix it with: dominos config edit",
            )
        return data

    def exists(self) -> bool:
        return bool(self._read())

    def load(self) -> dict[str, Any] | None:
        data = self._read()
        return data or None

    def save(self, doc: dict[str, Any]) -> None:
        payload = json.dumps(doc, ensure_ascii=False, indent=2) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".config-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise ConfigStorageError(f"Could not write {self._path}: {exc}") from exc
        logger.debug("wrote %d bytes to %s", len(payload), self._path)
