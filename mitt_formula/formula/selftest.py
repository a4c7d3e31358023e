"""Smoke test for an installed binary.

``mitt --help`` prints its usage and exits with status 1, not 0. The test
accepts exactly that status and requires the program name in the combined
stdout/stderr output.
"""

from __future__ import annotations

from dataclasses import dataclass

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import SelfTestFailed
from mitt_formula.formula.model import BINARY_NAME, InstalledBinary
from mitt_formula.platform.process import run

__all__ = ["SelfTestReport", "run_self_test", "HELP_EXIT_CODE"]

HELP_EXIT_CODE = 1


@dataclass(frozen=True, slots=True)
class SelfTestReport:
    command: tuple[str, ...]
    returncode: int
    output: str


def run_self_test(
    installed: InstalledBinary,
    *,
    expected_substring: str = BINARY_NAME,
    timeout: float = 30.0,
) -> Result[SelfTestReport, SelfTestFailed]:
    """Run ``<binary> --help`` and check output and exit status."""
    cmd = [str(installed.path), "--help"]
    result = run(cmd, timeout=timeout, expected=(HELP_EXIT_CODE,), merge_stderr=True)

    if isinstance(result, Err):
        error = result.error
        output = error.stdout or error.stderr
        if error.returncode == -1:
            message = f"Could not run binary: {error.stderr}"
        else:
            message = f"Expected --help to exit with {HELP_EXIT_CODE}"
        return Err(
            SelfTestFailed(
                path=installed.path,
                returncode=error.returncode,
                output=output,
                message=message,
            )
        )

    if expected_substring not in result.value:
        return Err(
            SelfTestFailed(
                path=installed.path,
                returncode=HELP_EXIT_CODE,
                output=result.value,
                message=f"Help output does not mention {expected_substring!r}",
            )
        )

    return Ok(SelfTestReport(command=tuple(cmd), returncode=HELP_EXIT_CODE, output=result.value))
