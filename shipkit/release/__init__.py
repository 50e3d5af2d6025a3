"""Release pipelines: metadata resolution, change log and web archive."""

from shipkit.release.archive import package_web_bundle
from shipkit.release.changelog import ChangeCategory, classify, synthesize_release_notes
from shipkit.release.config import ShipConfig, load_config, load_config_or_default
from shipkit.release.errors import (
    ConfigError,
    FilesystemError,
    HistoryUnavailable,
    PreconditionError,
    ReleaseError,
)
from shipkit.release.metadata import resolve_metadata
from shipkit.release.model import ArchiveArtifact, ReleaseMetadata, WrittenNotes

__all__ = [
    # model
    "ArchiveArtifact",
    "ReleaseMetadata",
    "WrittenNotes",
    # config
    "ShipConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ConfigError",
    "FilesystemError",
    "HistoryUnavailable",
    "PreconditionError",
    "ReleaseError",
    # pipelines
    "ChangeCategory",
    "classify",
    "package_web_bundle",
    "resolve_metadata",
    "synthesize_release_notes",
]
