from __future__ import annotations

import typer

from mitt_formula import __version__
from mitt_formula.cli.commands.bump import bump
from mitt_formula.cli.commands.info import info, versions
from mitt_formula.cli.commands.install import install
from mitt_formula.cli.commands.manage import selftest, status, uninstall
from mitt_formula.cli.commands.resolve import resolve

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Install the mitt encrypted file transfer CLI.",
)


# Commands
app.command()(install)
app.command()(resolve)
app.command()(info)
app.command()(versions)
app.command("test")(selftest)
app.command()(status)
app.command()(uninstall)
app.command()(bump)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
