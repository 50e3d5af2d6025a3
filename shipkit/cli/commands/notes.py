from __future__ import annotations

from pathlib import Path

import typer

from shipkit.cli.commands._helpers import exit_on_error, metadata_or_exit
from shipkit.cli.context import build_context
from shipkit.git.repository import Repository
from shipkit.release.changelog import synthesize_release_notes


def notes(
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
    depth: int | None = typer.Option(
        None, "--depth", min=1, help="Commits to scan when no tag exists (default: 30)"
    ),
    out: str | None = typer.Option(None, "--out", help="Output directory, relative to the repo"),
) -> None:
    """Write categorized release notes from git history since the last tag."""
    ctx = build_context(repo, output_dir=out, fallback_depth=depth)
    metadata = metadata_or_exit(ctx)

    written = exit_on_error(
        synthesize_release_notes(
            metadata,
            Repository(ctx.repo_root),
            depth=ctx.config.history.fallback_depth,
            console=ctx.console,
        ),
        ctx,
    )
    ctx.console.success(f"Wrote {written.path}")
