"""Platform abstraction layer."""

from .detection import (
    Arch,
    HostInfo,
    Platform,
    detect,
    parse_arch,
    parse_platform,
)
from .paths import (
    default_bin_dir,
    default_cache_dir,
    home,
)
from .process import (
    ProcessError,
    run,
)

__all__ = [
    # detection
    "Arch",
    "HostInfo",
    "Platform",
    "detect",
    "parse_arch",
    "parse_platform",
    # paths
    "default_bin_dir",
    "default_cache_dir",
    "home",
    # process
    "ProcessError",
    "run",
]
