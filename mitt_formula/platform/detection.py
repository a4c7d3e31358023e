"""Host operating system and CPU architecture detection.

The release table only knows macOS and Linux on arm64 and x86_64, but
detection reports every host it can recognise (Windows included) so that
resolution, not detection, decides what is unsupported.
"""

from __future__ import annotations

import os as _os
import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "HostInfo",
    "detect",
    "detect_arch",
    "detect_platform",
    "parse_arch",
    "parse_platform",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Arch(Enum):
    """CPU architecture."""

    X86_64 = auto()
    ARM64 = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class HostInfo:
    """Detected (or overridden) host platform and architecture."""

    platform: Platform
    arch: Arch

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


_PLATFORM_ALIASES = {
    "linux": Platform.LINUX,
    "macos": Platform.MACOS,
    "darwin": Platform.MACOS,
    "osx": Platform.MACOS,
    "mac": Platform.MACOS,
    "windows": Platform.WINDOWS,
    "win32": Platform.WINDOWS,
    "win": Platform.WINDOWS,
}

_ARCH_ALIASES = {
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "x64": Arch.X86_64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


def parse_platform(value: str) -> Platform:
    """Map an OS name or alias to a Platform (UNKNOWN when unrecognised)."""
    return _PLATFORM_ALIASES.get(value.strip().lower(), Platform.UNKNOWN)


def parse_arch(value: str) -> Arch:
    """Map a machine name or alias to an Arch (UNKNOWN when unrecognised)."""
    return _ARCH_ALIASES.get(value.strip().lower(), Arch.UNKNOWN)


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: platform.system() may query WMI on Windows; sys.platform is enough.
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the current CPU architecture (cached)."""
    if detect_platform() == Platform.WINDOWS:
        machine = (
            _os.environ.get("PROCESSOR_ARCHITEW6432")
            or _os.environ.get("PROCESSOR_ARCHITECTURE")
            or ""
        )
    else:
        machine = _platform.machine()
    return parse_arch(machine)


@lru_cache(maxsize=1)
def detect() -> HostInfo:
    """Detect host platform and architecture (cached)."""
    return HostInfo(platform=detect_platform(), arch=detect_arch())
