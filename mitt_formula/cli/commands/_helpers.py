"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from mitt_formula.core.result import Err, Result
from mitt_formula.formula.errors import InstallError
from mitt_formula.output.errors import install_error_exit_code, print_install_error
from mitt_formula.services.install import InstallService

if TYPE_CHECKING:
    from mitt_formula.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error(result: Result[T, InstallError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        print_install_error(result.error, ctx.console)
        raise typer.Exit(code=install_error_exit_code(result.error))
    return result.value


def build_service(ctx: CLIContext) -> InstallService:
    return InstallService(config=ctx.config, host=ctx.host, console=ctx.console)


OS_OPTION = typer.Option(None, "--os", help="Target OS (macos, linux). Default: detected.")
ARCH_OPTION = typer.Option(
    None, "--arch", help="Target architecture (arm64, x86_64). Default: detected."
)
VERSION_OPTION = typer.Option(None, "--version", "-V", help="Release version. Default: latest.")
BIN_DIR_OPTION = typer.Option(None, "--bin-dir", help="Install directory. Default: ~/.local/bin.")
CONFIG_OPTION = typer.Option(None, "--config", help="TOML config file with an [install] table.")
