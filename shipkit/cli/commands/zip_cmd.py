from __future__ import annotations

from pathlib import Path

import typer

from shipkit.cli.commands._helpers import exit_on_error, metadata_or_exit
from shipkit.cli.context import build_context
from shipkit.output.console import Style
from shipkit.release.archive import package_web_bundle


def zip_web(
    repo: Path | None = typer.Option(None, "--repo", help="Repository root (default: cwd)"),
    build_dir: str | None = typer.Option(
        None, "--build-dir", help="Build output directory, relative to the repo (default: dist)"
    ),
    app_name: str | None = typer.Option(
        None, "--app-name", help="Archive name prefix (default: manifest name)"
    ),
    out: str | None = typer.Option(None, "--out", help="Output directory, relative to the repo"),
) -> None:
    """Package the built web bundle into a versioned zip."""
    ctx = build_context(repo, app_name=app_name, build_dir=build_dir, output_dir=out)
    metadata = metadata_or_exit(ctx)

    artifact = exit_on_error(
        package_web_bundle(
            metadata,
            ctx.repo_root / ctx.config.archive.build_dir,
            entry_point=ctx.config.archive.entry_point,
            console=ctx.console,
        ),
        ctx,
    )
    ctx.console.success(f"Created {artifact.path}")
    ctx.console.print(f"{artifact.size} bytes  sha256 {artifact.sha256}", Style.DIM)
