from __future__ import annotations

import typer

from mitt_formula.cli.commands._helpers import exit_on_error
from mitt_formula.cli.context import build_context
from mitt_formula.core.errors import ErrorCode
from mitt_formula.formula.bump import compute_release
from mitt_formula.formula.http import RealHttpClient
from mitt_formula.formula.table import load_default_table, render_release_toml


def bump(version: str = typer.Argument(..., help="New release version, e.g. 0.5.0")) -> None:
    """Download a new release's assets and print its table row."""
    ctx = build_context()
    table = load_default_table()
    http = RealHttpClient(timeout=ctx.config.timeout, user_agent=ctx.config.user_agent)

    try:
        release = exit_on_error(compute_release(table.info, version, http), ctx)
        table.append(release)
    except ValueError as e:
        ctx.console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    typer.echo(render_release_toml(release), nl=False)
