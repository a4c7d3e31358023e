"""Compute the release row for a newly published version.

Downloads the four platform assets from the conventional release URL,
hashes them, and builds a validated Release. The row is only appended to
the table file by hand, after review.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import NetworkError
from mitt_formula.formula.fetch import sha256_bytes
from mitt_formula.formula.model import (
    SUPPORTED_PLATFORMS,
    AssetEntry,
    PlatformKey,
    Release,
    asset_file_name,
)

if TYPE_CHECKING:
    from mitt_formula.formula.http import HttpClient
    from mitt_formula.formula.table import FormulaInfo

__all__ = ["asset_url", "compute_release"]


def asset_url(homepage: str, version: str, key: PlatformKey) -> str:
    """Conventional download URL for one platform asset.

    Example:
        https://github.com/no-way-labs/caldron/releases/download/v0.4.0/mitt-linux-x86_64.tar.gz
    """
    return f"{homepage.rstrip('/')}/releases/download/v{version}/{asset_file_name(key)}"


def compute_release(
    info: FormulaInfo,
    version: str,
    http: HttpClient,
) -> Result[Release, NetworkError]:
    """Download every asset of version and record its digest.

    Raises:
        ValueError: if version is not a semantic version
    """
    descriptor = info.descriptor(version.strip().removeprefix("v"))
    assets: dict[PlatformKey, AssetEntry] = {}

    for key in SUPPORTED_PLATFORMS:
        url = asset_url(info.homepage, descriptor.version, key)
        downloaded = http.get_bytes(url)
        if isinstance(downloaded, Err):
            return downloaded
        assets[key] = AssetEntry(platform=key, url=url, sha256=sha256_bytes(downloaded.value))

    return Ok(Release(descriptor=descriptor, assets=assets))
