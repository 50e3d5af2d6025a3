"""Error types for the release pipelines.

Errors are plain data returned inside ``Err``; the CLI layer decides how to
present them and which exit code to use.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Manifest or configuration is missing or invalid. Fatal before any write."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PreconditionError:
    """A prior step (usually the web build) has not produced what we need."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FilesystemError:
    """Creating a directory or writing an artifact failed at the OS level."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class HistoryUnavailable:
    """Git history could not be read.

    Never fatal: the change log treats it as an empty history.
    """

    message: str


ReleaseError = ConfigError | PreconditionError | FilesystemError
