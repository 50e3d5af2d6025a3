"""Release metadata resolution.

Reads the version (and default app name) from the project manifest and makes
sure the output directory exists. Nothing here looks at the current working
directory; the repository root is always passed in.
"""

from __future__ import annotations

import json
from pathlib import Path

from shipkit.core.result import Err, Ok, Result
from shipkit.core.structured import StrDict, as_str_dict, get_str
from shipkit.release.config import ShipConfig
from shipkit.release.errors import ConfigError, FilesystemError
from shipkit.release.model import ReleaseMetadata

__all__ = ["read_manifest", "resolve_metadata"]

_FILENAME_UNSAFE = ("/", "\\", "\x00")


def read_manifest(path: Path) -> Result[StrDict, ConfigError]:
    """Parse the manifest as a JSON object."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"manifest not found: {path.name}",
                path=path,
                hint="run from the project root or pass --repo",
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"cannot read manifest: {e}", path=path))

    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"manifest is not valid JSON: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("manifest root must be a JSON object", path=path))
    return Ok(data)


def _manifest_app_name(manifest: StrDict) -> str | None:
    name = get_str(manifest, "name")
    if name is None:
        return None
    # npm scoped package: "@org/app" -> "app"
    return name.rsplit("/", 1)[-1] or None


def _unsafe_for_filename(value: str) -> bool:
    return any(ch in value for ch in _FILENAME_UNSAFE) or value in {".", ".."}


def resolve_metadata(
    repo_root: Path, config: ShipConfig
) -> Result[ReleaseMetadata, ConfigError | FilesystemError]:
    """Resolve ReleaseMetadata for ``repo_root``.

    Returns:
        Ok(ReleaseMetadata) with ``output_dir`` guaranteed to exist
        Err(ConfigError) for a missing/invalid manifest, version or app name
        Err(FilesystemError) if the output directory cannot be created
    """
    manifest_path = repo_root / config.release.manifest
    manifest = read_manifest(manifest_path)
    if isinstance(manifest, Err):
        return manifest

    raw_version = manifest.value.get("version")
    version = get_str(manifest.value, "version")
    if version is None:
        return Err(
            ConfigError(
                "manifest has no version",
                path=manifest_path,
                hint='set a non-empty "version" string field',
            )
        )
    if version != raw_version:
        return Err(
            ConfigError(
                f"version has surrounding whitespace: {raw_version!r}",
                path=manifest_path,
            )
        )
    if _unsafe_for_filename(version):
        return Err(
            ConfigError(f"version is not usable in a filename: {version!r}", path=manifest_path)
        )

    app_name = config.release.app_name or _manifest_app_name(manifest.value)
    if app_name is None:
        return Err(
            ConfigError(
                "cannot determine app name",
                path=manifest_path,
                hint='set "name" in the manifest or app_name in shipkit.toml',
            )
        )
    if _unsafe_for_filename(app_name):
        return Err(ConfigError(f"app name is not usable in a filename: {app_name!r}"))

    output_dir = repo_root / config.release.output_dir
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(
            FilesystemError(
                f"cannot create output directory: {e.strerror or e}",
                path=output_dir,
            )
        )

    return Ok(ReleaseMetadata(version=version, output_dir=output_dir, app_name=app_name))
