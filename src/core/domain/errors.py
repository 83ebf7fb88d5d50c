"""Error taxonomy.

Every failure a command can end with is a `DominosCliError`. Each one carries
the exit code band it maps to and, optionally, a remediation hint for the
user. The CLI prints both in a single place.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence


class ExitCode(IntEnum):
    OK = 0
    CONFIG_ERROR = 1
    PROVIDER_FAILURE = 2


class DominosCliError(Exception):
    exit_code: ExitCode = ExitCode.CONFIG_ERROR
    default_hint: str | None = None

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else self.default_hint


class ConfigMissingError(DominosCliError):
    default_hint = "Run: dominos config setup"

    def __init__(self, message: str = "No configuration found", *, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)


class ConfigInvalidError(DominosCliError):
    default_hint = "Run: dominos config validate"

    def __init__(self, defects: Sequence[str], *, hint: str | None = None) -> None:
        super().__init__("Configuration has errors", hint=hint)
        self.defects = list(defects)


class ConfigStorageError(DominosCliError):
    """Reading or writing the configuration file failed."""


class PresetNotFoundError(DominosCliError):
    default_hint = "Add one with: dominos config edit"

    def __init__(self, preset_name: str, available: Sequence[str]) -> None:
        self.preset_name = preset_name
        self.available = list(available)
        super().__init__(
            f"Preset '{preset_name}' not found. Available presets: {', '.join(self.available)}"
        )


class ProviderError(DominosCliError):
    """Any rejected call to the ordering provider (lookup, validate, price, place, track)."""

    exit_code = ExitCode.PROVIDER_FAILURE


class SetupError(DominosCliError):
    default_hint = "Check the delivery address and run: dominos config setup"


class UserCancelledError(DominosCliError):
    def __init__(self, message: str = "Setup cancelled") -> None:
        super().__init__(message)


class EditorError(DominosCliError):
    default_hint = "Set EDITOR or VISUAL to an editor available on your PATH"


class MissingPhoneError(DominosCliError):
    default_hint = "Usage: dominos track [phone]"

    def __init__(self, message: str = "No phone number provided and none in config") -> None:
        super().__init__(message)
