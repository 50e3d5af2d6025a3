from __future__ import annotations

from pathlib import Path

import pytest

from shipkit.core.errors import ErrorCode
from shipkit.output.console import MockConsole, Style
from shipkit.output.errors import print_release_error, release_error_exit_code
from shipkit.release.errors import (
    ConfigError,
    FilesystemError,
    PreconditionError,
    ReleaseError,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ConfigError("manifest has no version"), ErrorCode.CONFIG_ERROR),
        (PreconditionError("build output directory missing: dist"), ErrorCode.PRECONDITION_ERROR),
        (FilesystemError("failed to write archive"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: ReleaseError, code: ErrorCode) -> None:
    assert release_error_exit_code(error) == int(code)


def test_precondition_names_the_build_step() -> None:
    console = MockConsole()
    error = PreconditionError(
        "build output directory missing: dist",
        path=Path("dist"),
        hint="run the web build step first (e.g. npm run build:web)",
    )

    print_release_error(error, console)

    assert console.messages[0] == "error: build output directory missing: dist"
    assert console.outputs[-1].style == Style.DIM
    assert "run the web build step first" in console.outputs[-1].message


def test_config_error_shows_file() -> None:
    console = MockConsole()
    print_release_error(ConfigError("manifest has no version", path=Path("package.json")), console)

    assert "invalid release configuration" in console.messages[0]
    assert console.find("package.json")


def test_filesystem_error_shows_path() -> None:
    console = MockConsole()
    error = FilesystemError("cannot create output directory", path=Path("rel"))
    print_release_error(error, console)

    assert console.has_error()
    assert console.messages[-1] == "path: rel"
