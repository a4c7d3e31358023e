from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from mitt_formula.core.config import InstallerConfig, load_config
from mitt_formula.core.errors import ErrorCode
from mitt_formula.core.result import Err
from mitt_formula.output.console import ConsoleProtocol, RichConsole
from mitt_formula.platform.detection import HostInfo, detect, parse_arch, parse_platform


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: InstallerConfig
    host: HostInfo
    console: ConsoleProtocol


def build_context(
    *,
    config_path: Path | None = None,
    os_name: str | None = None,
    arch: str | None = None,
    bin_dir: Path | None = None,
    self_test: bool | None = None,
) -> CLIContext:
    """Assemble config, host and console for a command.

    Precedence: CLI flags > config file > defaults. ``--os``/``--arch``
    replace the detected host; unrecognised names are kept as unknown and
    rejected at resolution time.
    """
    console = RichConsole()

    config = InstallerConfig()
    if config_path is not None:
        config_result = load_config(config_path)
        if isinstance(config_result, Err):
            console.error(config_result.error.message)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = config_result.value

    config = config.with_overrides(
        bin_dir=bin_dir.expanduser() if bin_dir is not None else None,
        self_test=self_test,
    )

    detected = detect()
    host = HostInfo(
        platform=parse_platform(os_name) if os_name else detected.platform,
        arch=parse_arch(arch) if arch else detected.arch,
    )

    return CLIContext(config=config, host=host, console=console)
