from __future__ import annotations

from pathlib import Path

import typer

from mitt_formula.cli.commands._helpers import (
    ARCH_OPTION,
    BIN_DIR_OPTION,
    CONFIG_OPTION,
    OS_OPTION,
    VERSION_OPTION,
    build_service,
    exit_on_error,
)
from mitt_formula.cli.context import build_context


def install(
    version: str | None = VERSION_OPTION,
    bin_dir: Path | None = BIN_DIR_OPTION,
    os_name: str | None = OS_OPTION,
    arch: str | None = ARCH_OPTION,
    config: Path | None = CONFIG_OPTION,
    skip_test: bool = typer.Option(
        False, "--skip-test", help="Do not run mitt --help after install."
    ),
    force: bool = typer.Option(False, "--force", help="Reinstall even if already installed."),
) -> None:
    """Download, verify and install the mitt binary."""
    ctx = build_context(
        config_path=config,
        os_name=os_name,
        arch=arch,
        bin_dir=bin_dir,
        self_test=False if skip_test else None,
    )
    service = build_service(ctx)
    exit_on_error(service.install(version, force=force), ctx)
