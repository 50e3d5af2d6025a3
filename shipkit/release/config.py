"""Typed release configuration.

Settings come from an optional ``shipkit.toml`` at the repository root. Every
field has a default, so a repository without the file behaves like the
npm release scripts: ``package.json`` manifest, ``dist/`` build output and a
``release/`` output directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from shipkit.core.result import Err, Ok, Result
from shipkit.core.structured import StrDict, as_str_dict, get_int, get_str, get_table
from shipkit.release.errors import ConfigError

__all__ = [
    "ArchiveConfig",
    "CONFIG_FILENAME",
    "DEFAULT_FALLBACK_DEPTH",
    "HistoryConfig",
    "ReleaseConfig",
    "ShipConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "shipkit.toml"

DEFAULT_MANIFEST = "package.json"
DEFAULT_OUTPUT_DIR = "release"
DEFAULT_BUILD_DIR = "dist"
DEFAULT_ENTRY_POINT = "index.html"
# Commits scanned when no tag is reachable.
DEFAULT_FALLBACK_DEPTH = 30


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    manifest: str = DEFAULT_MANIFEST
    output_dir: str = DEFAULT_OUTPUT_DIR
    app_name: str | None = None


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    fallback_depth: int = DEFAULT_FALLBACK_DEPTH


@dataclass(frozen=True, slots=True)
class ArchiveConfig:
    build_dir: str = DEFAULT_BUILD_DIR
    entry_point: str = DEFAULT_ENTRY_POINT


@dataclass(frozen=True, slots=True)
class ShipConfig:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ShipConfig:
        """Create ShipConfig from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        history: StrDict = get_table(data, "history") or {}
        archive: StrDict = get_table(data, "archive") or {}

        depth = get_int(history, "fallback_depth")
        if depth is not None and depth < 1:
            raise ValueError(f"history.fallback_depth must be >= 1 (got {depth})")

        return cls(
            release=ReleaseConfig(
                manifest=get_str(release, "manifest") or DEFAULT_MANIFEST,
                output_dir=get_str(release, "output_dir") or DEFAULT_OUTPUT_DIR,
                app_name=get_str(release, "app_name"),
            ),
            history=HistoryConfig(fallback_depth=depth or DEFAULT_FALLBACK_DEPTH),
            archive=ArchiveConfig(
                build_dir=get_str(archive, "build_dir") or DEFAULT_BUILD_DIR,
                entry_point=get_str(archive, "entry_point") or DEFAULT_ENTRY_POINT,
            ),
        )

    def with_overrides(
        self,
        *,
        app_name: str | None = None,
        output_dir: str | None = None,
        build_dir: str | None = None,
        fallback_depth: int | None = None,
    ) -> ShipConfig:
        """Return a copy with CLI overrides applied (None keeps the current value)."""
        release = self.release
        if app_name is not None:
            release = replace(release, app_name=app_name)
        if output_dir is not None:
            release = replace(release, output_dir=output_dir)

        archive = self.archive
        if build_dir is not None:
            archive = replace(archive, build_dir=build_dir)

        history = self.history
        if fallback_depth is not None:
            history = replace(history, fallback_depth=fallback_depth)

        return ShipConfig(release=release, history=history, archive=archive)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ShipConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to shipkit.toml

    Returns:
        Ok(ShipConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ShipConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[ShipConfig, ConfigError]:
    """Load ``shipkit.toml`` from the repository root, or defaults when absent.

    A file that exists but does not parse is still an error.
    """
    path = repo_root / CONFIG_FILENAME
    if not path.exists():
        return Ok(ShipConfig())
    return load_config(path)
