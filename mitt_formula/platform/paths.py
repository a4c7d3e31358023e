"""User-level default directories.

- bin:   ~/.local/bin
- cache: $XDG_CACHE_HOME/mitt-formula/downloads, ~/Library/Caches/... on macOS
"""

from __future__ import annotations

import os
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "home",
    "default_bin_dir",
    "default_cache_dir",
]

APP_NAME = "mitt-formula"


def home() -> Path:
    """Get user's home directory (HOME first, for CI containers)."""
    value = os.environ.get("HOME")
    if value:
        return Path(value)
    return Path.home()


def default_bin_dir() -> Path:
    return home() / ".local" / "bin"


def default_cache_dir() -> Path:
    if detect_platform() == Platform.MACOS:
        base = home() / "Library" / "Caches"
    else:
        xdg = os.environ.get("XDG_CACHE_HOME")
        base = Path(xdg) if xdg else home() / ".cache"
    return base / APP_NAME / "downloads"
