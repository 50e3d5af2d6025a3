from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from shipkit.core.result import Err
from shipkit.output.console import ConsoleProtocol, RichConsole
from shipkit.output.errors import print_release_error, release_error_exit_code
from shipkit.release.config import ShipConfig, load_config_or_default


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo_root: Path
    config: ShipConfig
    console: ConsoleProtocol


def build_context(
    repo: Path | None,
    *,
    console: ConsoleProtocol | None = None,
    app_name: str | None = None,
    output_dir: str | None = None,
    build_dir: str | None = None,
    fallback_depth: int | None = None,
) -> CLIContext:
    """Resolve the repository root and configuration once, at the CLI boundary."""
    out = console or RichConsole()
    repo_root = (repo or Path.cwd()).expanduser().resolve()

    config_result = load_config_or_default(repo_root)
    if isinstance(config_result, Err):
        print_release_error(config_result.error, out)
        raise typer.Exit(code=release_error_exit_code(config_result.error))

    config = config_result.value.with_overrides(
        app_name=app_name,
        output_dir=output_dir,
        build_dir=build_dir,
        fallback_depth=fallback_depth,
    )
    return CLIContext(repo_root=repo_root, config=config, console=out)
