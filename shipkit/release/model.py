from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ReleaseMetadata:
    """Per-invocation release facts shared by both pipelines."""

    version: str
    output_dir: Path
    app_name: str

    @property
    def notes_filename(self) -> str:
        return f"release-notes-v{self.version}.md"

    @property
    def archive_filename(self) -> str:
        return f"{self.app_name}-web-v{self.version}.zip"

    @property
    def notes_path(self) -> Path:
        return self.output_dir / self.notes_filename

    @property
    def archive_path(self) -> Path:
        return self.output_dir / self.archive_filename


@dataclass(frozen=True, slots=True)
class WrittenNotes:
    path: Path
    commit_count: int
    markdown: str


@dataclass(frozen=True, slots=True)
class ArchiveArtifact:
    path: Path
    size: int
    sha256: str
    entries: int
