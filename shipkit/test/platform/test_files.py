from __future__ import annotations

import os
from pathlib import Path

import pytest

from shipkit.platform.files import atomic_write_text, fsync_file


def test_atomic_write_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "release" / "release-notes-v1.0.0.md"
    atomic_write_text(path, "# Notes\n")

    assert path.read_text(encoding="utf-8") == "# Notes\n"


def test_atomic_write_text_replaces_existing_content(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_text("old", encoding="utf-8")

    atomic_write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


def test_atomic_write_text_keeps_newlines_verbatim(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    atomic_write_text(path, "a\nb\n")

    assert path.read_bytes() == b"a\nb\n"


def test_atomic_write_text_cleans_temp_file_on_replace_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "notes.md"
    path.write_text("previous", encoding="utf-8")

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        atomic_write_text(path, "payload")

    assert path.read_text(encoding="utf-8") == "previous"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["notes.md"]


def test_fsync_file_on_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "a.bin"
    path.write_bytes(b"x")
    fsync_file(path)


def test_fsync_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        fsync_file(tmp_path / "missing.bin")
