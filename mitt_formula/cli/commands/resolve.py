from __future__ import annotations

import typer

from mitt_formula.cli.commands._helpers import (
    ARCH_OPTION,
    OS_OPTION,
    VERSION_OPTION,
    build_service,
    exit_on_error,
)
from mitt_formula.cli.context import build_context


def resolve(
    version: str | None = VERSION_OPTION,
    os_name: str | None = OS_OPTION,
    arch: str | None = ARCH_OPTION,
) -> None:
    """Print the asset URL and sha256 for a host, without downloading."""
    ctx = build_context(os_name=os_name, arch=arch)
    resolution = exit_on_error(build_service(ctx).resolve(version), ctx)

    typer.echo(f"version  {resolution.release.version}")
    typer.echo(f"platform {resolution.platform}")
    typer.echo(f"url      {resolution.asset.url}")
    typer.echo(f"sha256   {resolution.asset.sha256}")
