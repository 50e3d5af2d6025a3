"""Web bundle packaging.

Zips the build output directory into ``{app}-web-v{version}.zip``:

- Entries are rooted at the build directory's children (no ``dist/`` prefix)
- Stable, sorted entry order and maximum deflate compression
- Any previous archive at the target path is removed first
- Success is only reported once the file is closed and synced to disk
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import TYPE_CHECKING
from zipfile import ZIP_DEFLATED, ZipFile

from shipkit.core.result import Err, Ok, Result
from shipkit.platform.files import fsync_file
from shipkit.release.config import DEFAULT_ENTRY_POINT
from shipkit.release.errors import FilesystemError, PreconditionError
from shipkit.release.model import ArchiveArtifact, ReleaseMetadata

if TYPE_CHECKING:
    from shipkit.output.console import ConsoleProtocol

__all__ = ["collect_tree", "package_web_bundle"]

_COMPRESS_LEVEL = 9
_BUILD_HINT = "run the web build step first (e.g. npm run build:web)"


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _reraise(error: OSError) -> None:
    raise error


def collect_tree(base_dir: Path, *, exclude: Path | None = None) -> list[tuple[Path, str]]:
    """List every file and directory under ``base_dir`` with its archive name.

    Archive names are posix paths relative to ``base_dir``. Raises OSError if
    any directory in the tree cannot be listed, so a partial listing is never
    returned.
    """
    out: list[tuple[Path, str]] = []
    for root, dirnames, filenames in os.walk(base_dir, onerror=_reraise):
        parent = Path(root)
        for name in (*dirnames, *filenames):
            p = parent / name
            if exclude is not None and p == exclude:
                continue
            out.append((p, p.relative_to(base_dir).as_posix()))
    out.sort(key=lambda item: item[0])
    return out


def _reason(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


def _check_build_dir(build_dir: Path, entry_point: str) -> PreconditionError | None:
    if not build_dir.is_dir():
        return PreconditionError(
            f"build output directory missing: {build_dir}",
            path=build_dir,
            hint=_BUILD_HINT,
        )
    if not (build_dir / entry_point).is_file():
        return PreconditionError(
            f"build entry point missing: {build_dir / entry_point}",
            path=build_dir,
            hint=_BUILD_HINT,
        )
    return None


def _write_zip(zip_path: Path, files: list[tuple[Path, str]]) -> None:
    # Build tools sometimes emit mtime=0 files; ZIP cannot store pre-1980 dates.
    with ZipFile(
        zip_path,
        "w",
        compression=ZIP_DEFLATED,
        compresslevel=_COMPRESS_LEVEL,
        strict_timestamps=False,
    ) as zf:
        for src, arc in files:
            zf.write(src, arcname=arc)
    fsync_file(zip_path)


def package_web_bundle(
    metadata: ReleaseMetadata,
    build_dir: Path,
    *,
    entry_point: str = DEFAULT_ENTRY_POINT,
    console: ConsoleProtocol | None = None,
) -> Result[ArchiveArtifact, PreconditionError | FilesystemError]:
    """Package ``build_dir`` into ``metadata.archive_path``.

    Returns:
        Ok(ArchiveArtifact) once the archive is fully on disk
        Err(PreconditionError) if the build output is missing
        Err(FilesystemError) on any I/O failure; no partial archive is left
    """
    missing = _check_build_dir(build_dir, entry_point)
    if missing is not None:
        return Err(missing)

    zip_path = metadata.archive_path
    try:
        files = collect_tree(build_dir, exclude=zip_path)
    except OSError as e:
        return Err(
            FilesystemError(
                f"failed to read build output: {_reason(e)} ({e.filename or build_dir})",
                path=build_dir,
            )
        )

    try:
        zip_path.unlink(missing_ok=True)
    except OSError as e:
        return Err(
            FilesystemError(
                f"cannot remove previous archive: {e.strerror or e}",
                path=zip_path,
            )
        )

    if console is not None:
        console.info(f"Packaging {len(files)} entries from {build_dir}")

    try:
        _write_zip(zip_path, files)
        artifact = ArchiveArtifact(
            path=zip_path,
            size=zip_path.stat().st_size,
            sha256=_sha256_file(zip_path),
            entries=len(files),
        )
    except (OSError, ValueError) as e:
        # ValueError covers entry names zipfile cannot encode (UnicodeEncodeError).
        zip_path.unlink(missing_ok=True)
        return Err(FilesystemError(f"failed to write archive: {_reason(e)}", path=zip_path))
    except BaseException:
        zip_path.unlink(missing_ok=True)
        raise

    return Ok(artifact)
