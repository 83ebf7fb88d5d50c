"""External editor launcher for `dominos config edit`."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

from core.domain.errors import EditorError

logger = logging.getLogger(__name__)


def resolve_editor(environ: Mapping[str, str], platform: str) -> str:
    """EDITOR, then VISUAL, then a platform default."""

    for key in ("EDITOR", "VISUAL"):
        value = (environ.get(key) or "").strip()
        if value:
            return value
    if platform.startswith("win"):
        return "notepad"
    if platform == "darwin":
        return "open -W -t"
    return "vi"


def open_in_editor(editor: str, path: Path) -> None:
    # Windows paths contain backslashes that POSIX shlex would eat.
    command = [*shlex.split(editor, posix=os.name != "nt"), str(path)]
    logger.debug("launching editor: %s", command)
    try:
        subprocess.run(command, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise EditorError(f"Error opening editor '{editor}': {exc}") from exc
