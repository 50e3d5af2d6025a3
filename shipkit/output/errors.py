"""Error presentation utilities.

Centralized release error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipkit.core.errors import ErrorCode
from shipkit.output.console import Style
from shipkit.release.errors import (
    ConfigError,
    FilesystemError,
    PreconditionError,
    ReleaseError,
)

if TYPE_CHECKING:
    from shipkit.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error, naming the failed precondition."""
    match error:
        case ConfigError(message=message, path=path):
            console.error(f"invalid release configuration: {message}")
            if path is not None:
                console.print(f"file: {path}", Style.DIM)
        case PreconditionError(message=message):
            console.error(message)
        case FilesystemError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"path: {path}", Style.DIM)

    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case PreconditionError():
            return int(ErrorCode.PRECONDITION_ERROR)
        case FilesystemError():
            return int(ErrorCode.IO_ERROR)
