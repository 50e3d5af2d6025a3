"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from shipkit.core.result import Err, Ok, Result
from shipkit.output.errors import print_release_error, release_error_exit_code
from shipkit.release.errors import ReleaseError
from shipkit.release.metadata import resolve_metadata
from shipkit.release.model import ReleaseMetadata

if TYPE_CHECKING:
    from shipkit.cli.context import CLIContext

T = TypeVar("T")


def report_error(error: ReleaseError, ctx: CLIContext) -> int:
    """Print ``error`` and return the exit code it maps to."""
    print_release_error(error, ctx.console)
    return release_error_exit_code(error)


def exit_on_error(result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            exit_with_code(report_error(error, ctx))


def metadata_or_exit(ctx: CLIContext) -> ReleaseMetadata:
    return exit_on_error(resolve_metadata(ctx.repo_root, ctx.config), ctx)


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
