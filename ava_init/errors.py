"""Exceptions raised by ava-init."""

from typing import Sequence


class AvaInitError(Exception):
    """Base class for all ava-init failures."""


class ManifestNotFoundError(AvaInitError):
    pass


class ManifestParseError(AvaInitError):
    pass


class ManifestWriteError(AvaInitError):
    pass


class InstallError(AvaInitError):
    """Raised when the package manager cannot be spawned or exits non-zero.

    Attributes:
        command: The argument vector that was executed
        returncode: Exit status of the process, or None if it never started
    """

    def __init__(
        self, message: str, command: Sequence[str], returncode: int | None = None
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
