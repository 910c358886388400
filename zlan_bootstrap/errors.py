from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lib.command import CmdResult


class BootstrapError(RuntimeError):
    """Base for every failure that should end a run with exit status 1."""


class CommandError(BootstrapError):
    def __init__(self, message: str, result: "CmdResult") -> None:
        super().__init__(message)
        self.result = result


class DetectionError(BootstrapError):
    pass


class KeyFetchError(BootstrapError):
    pass


class UnsupportedPlatformError(BootstrapError):
    pass


class InstallError(BootstrapError):
    pass


class ConfigValidationError(BootstrapError):
    pass


class CredentialsError(BootstrapError):
    pass
