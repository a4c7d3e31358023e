from __future__ import annotations

import typer

from mitt_formula.cli.context import build_context
from mitt_formula.core.result import Ok
from mitt_formula.formula.model import SUPPORTED_PLATFORMS
from mitt_formula.formula.table import load_default_table
from mitt_formula.output.console import Style


def info() -> None:
    """Show formula metadata."""
    ctx = build_context()
    table = load_default_table()
    meta = table.info

    ctx.console.header(f"{meta.name}: {meta.description}")
    ctx.console.print(f"homepage  {meta.homepage}")
    ctx.console.print(f"license   {meta.license}")
    ctx.console.print(f"versions  {', '.join(table.versions()) or '-'}")
    ctx.console.print(f"platforms {', '.join(str(k) for k in SUPPORTED_PLATFORMS)}")
    latest = table.latest()
    if isinstance(latest, Ok):
        assets = latest.value.assets
        pending = ', '.join(str(k) for k in SUPPORTED_PLATFORMS if not assets[k].is_published)
        if pending:
            ctx.console.warning(f"{latest.value.version} not yet published for: {pending}")
    ctx.console.print(f"host      {ctx.host}", Style.DIM)


def versions() -> None:
    """List known versions, newest first."""
    for version in reversed(load_default_table().versions()):
        typer.echo(version)
