"""Error presentation utilities.

Centralized install error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mitt_formula.core.errors import ErrorCode
from mitt_formula.formula.errors import (
    ExtractionError,
    InstallError,
    IntegrityMismatch,
    NetworkError,
    SelfTestFailed,
    UnknownVersion,
    UnsupportedPlatform,
)
from mitt_formula.output.console import Style

if TYPE_CHECKING:
    from mitt_formula.output.console import ConsoleProtocol

__all__ = ["print_install_error", "install_error_exit_code"]


def print_install_error(error: InstallError, console: ConsoleProtocol) -> None:
    """Print an install error with a hint where one helps."""
    match error:
        case UnsupportedPlatform(
            os=os_name, arch=arch, supported=supported, unpublished_in=version
        ) if version:
            console.error(f"mitt {version} is not yet published for {os_name}/{arch}")
            if supported:
                console.print(f"published: {', '.join(supported)}", Style.DIM)
            console.print("hint: the release table has no checksum for it yet", Style.DIM)
        case UnsupportedPlatform(os=os_name, arch=arch, supported=supported):
            console.error(f"no mitt release for {os_name}/{arch}")
            console.print(f"supported: {', '.join(supported)}", Style.DIM)
        case UnknownVersion(version=version, available=available):
            console.error(f"unknown version: {version}")
            if available:
                console.print(f"available: {', '.join(available)}", Style.DIM)
        case NetworkError():
            console.error(f"download failed: {error}")
        case IntegrityMismatch(url=url, expected=expected, actual=actual):
            console.error(f"checksum mismatch for {url}")
            console.print(f"expected: {expected}", Style.DIM)
            console.print(f"actual:   {actual}", Style.DIM)
            console.print("hint: nothing was installed", Style.DIM)
        case ExtractionError():
            console.error(f"install failed: {error}")
        case SelfTestFailed(output=output):
            console.error(f"self-test failed: {error}")
            if output.strip():
                console.print(output.strip(), Style.DIM)


def install_error_exit_code(error: InstallError) -> int:
    """Get exit code for an install error."""
    match error:
        case UnknownVersion():
            return int(ErrorCode.USER_ERROR)
        case UnsupportedPlatform():
            return int(ErrorCode.ENV_ERROR)
        case NetworkError():
            return int(ErrorCode.NETWORK_ERROR)
        case IntegrityMismatch():
            return int(ErrorCode.INTEGRITY_ERROR)
        case ExtractionError():
            return int(ErrorCode.IO_ERROR)
        case SelfTestFailed():
            return int(ErrorCode.TEST_ERROR)
