"""Release asset resolution - mapping a host to its download.

Resolution is a pure lookup of PlatformKey(os, arch) in the release's asset
mapping. It never touches the network, so an unsupported host fails before
anything is downloaded. An asset whose digest is still a placeholder is
reported the same way, so nothing unverifiable is ever fetched.
"""

from __future__ import annotations

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import UnsupportedPlatform
from mitt_formula.formula.model import SUPPORTED_PLATFORMS, AssetEntry, PlatformKey, Release
from mitt_formula.platform.detection import Arch, Platform

__all__ = ["resolve_asset"]


def resolve_asset(
    release: Release,
    host_os: Platform,
    host_arch: Arch,
) -> Result[AssetEntry, UnsupportedPlatform]:
    """Select the asset for a host.

    Args:
        release: Release row to resolve against
        host_os: Target operating system
        host_arch: Target CPU architecture

    Returns:
        Ok with the matching published AssetEntry, or Err(UnsupportedPlatform)
    """
    entry = release.asset(PlatformKey(host_os, host_arch))
    if entry is None:
        return Err(
            UnsupportedPlatform(
                os=str(host_os),
                arch=str(host_arch),
                supported=tuple(str(k) for k in SUPPORTED_PLATFORMS),
            )
        )
    if not entry.is_published:
        return Err(
            UnsupportedPlatform(
                os=str(host_os),
                arch=str(host_arch),
                supported=tuple(
                    str(k) for k in SUPPORTED_PLATFORMS if release.assets[k].is_published
                ),
                unpublished_in=release.version,
            )
        )
    return Ok(entry)
