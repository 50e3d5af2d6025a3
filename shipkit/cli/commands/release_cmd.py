from __future__ import annotations

from pathlib import Path

import typer

from shipkit.cli.commands._helpers import exit_with_code, metadata_or_exit, report_error
from shipkit.cli.context import build_context
from shipkit.core.result import Err, Ok
from shipkit.git.repository import Repository
from shipkit.release.archive import package_web_bundle
from shipkit.release.changelog import synthesize_release_notes


def release(
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
    depth: int | None = typer.Option(
        None, "--depth", min=1, help="Commits to scan when no tag exists (default: 30)"
    ),
    build_dir: str | None = typer.Option(
        None, "--build-dir", help="Build output directory, relative to the repo (default: dist)"
    ),
    app_name: str | None = typer.Option(
        None, "--app-name", help="Archive name prefix (default: manifest name)"
    ),
    out: str | None = typer.Option(None, "--out", help="Output directory, relative to the repo"),
) -> None:
    """Write release notes and package the web bundle.

    Both steps always run; the exit code is that of the first failing step.
    """
    ctx = build_context(
        repo,
        app_name=app_name,
        output_dir=out,
        build_dir=build_dir,
        fallback_depth=depth,
    )
    metadata = metadata_or_exit(ctx)
    codes: list[int] = []

    ctx.console.header(f"Release notes v{metadata.version}")
    match synthesize_release_notes(
        metadata,
        Repository(ctx.repo_root),
        depth=ctx.config.history.fallback_depth,
        console=ctx.console,
    ):
        case Ok(written):
            ctx.console.success(f"Wrote {written.path}")
        case Err(error):
            codes.append(report_error(error, ctx))

    ctx.console.header(f"Web archive {metadata.archive_filename}")
    match package_web_bundle(
        metadata,
        ctx.repo_root / ctx.config.archive.build_dir,
        entry_point=ctx.config.archive.entry_point,
        console=ctx.console,
    ):
        case Ok(artifact):
            ctx.console.success(f"Created {artifact.path}")
        case Err(error):
            codes.append(report_error(error, ctx))

    if codes:
        exit_with_code(codes[0])
