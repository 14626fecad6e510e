"""Configure AVA as the test runner of a JavaScript project."""

from ava_init.errors import (
    AvaInitError,
    InstallError,
    ManifestNotFoundError,
    ManifestParseError,
    ManifestWriteError,
)
from ava_init.tasks import init

__all__ = [
    "AvaInitError",
    "InstallError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ManifestWriteError",
    "init",
]
