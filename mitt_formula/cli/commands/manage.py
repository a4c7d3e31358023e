"""Post-install commands: test, status, uninstall."""

from __future__ import annotations

from pathlib import Path

import typer

from mitt_formula.cli.commands._helpers import BIN_DIR_OPTION, build_service, exit_on_error
from mitt_formula.cli.context import build_context
from mitt_formula.core.errors import ErrorCode
from mitt_formula.output.console import Style


def selftest(bin_dir: Path | None = BIN_DIR_OPTION) -> None:
    """Run mitt --help on the installed binary (expects exit status 1)."""
    ctx = build_context(bin_dir=bin_dir)
    report = exit_on_error(build_service(ctx).self_test(), ctx)
    ctx.console.success(f"{' '.join(report.command)} exited {report.returncode} as expected")


def status(bin_dir: Path | None = BIN_DIR_OPTION) -> None:
    """Show the installed version."""
    ctx = build_context(bin_dir=bin_dir)
    service = build_service(ctx)
    receipt = service.status()
    if receipt is None:
        ctx.console.print(f"mitt: not installed in {service.bin_dir}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    ctx.console.print(f"mitt {receipt.version} ({receipt.platform})")
    ctx.console.print(f"path      {service.bin_dir / 'mitt'}", Style.DIM)
    ctx.console.print(f"sha256    {receipt.sha256}", Style.DIM)
    ctx.console.print(f"installed {receipt.installed_at}", Style.DIM)

    latest = service.table.latest()
    if latest.is_ok() and latest.unwrap().version != receipt.version:
        ctx.console.info(f"newer version available: {latest.unwrap().version}")


def uninstall(
    bin_dir: Path | None = BIN_DIR_OPTION,
    purge_cache: bool = typer.Option(False, "--purge-cache", help="Also delete cached downloads."),
) -> None:
    """Remove the installed binary and its receipt."""
    ctx = build_context(bin_dir=bin_dir)
    build_service(ctx).uninstall(purge_cache=purge_cache)
