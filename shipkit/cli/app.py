from __future__ import annotations

import typer

from shipkit import __version__
from shipkit.cli.commands.notes import notes
from shipkit.cli.commands.release_cmd import release
from shipkit.cli.commands.zip_cmd import zip_web

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(notes)
app.command("zip")(zip_web)
app.command()(release)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def main() -> None:
    app()
