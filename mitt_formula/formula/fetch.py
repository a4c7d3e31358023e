"""Asset download with mandatory SHA-256 verification.

This module provides a Fetcher class that:
- Downloads an AssetEntry's URL through an injectable HttpClient
- Verifies the bytes against the entry's digest before returning them
- Optionally caches verified downloads, re-verifying cache hits
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import IntegrityMismatch, NetworkError
from mitt_formula.platform.files import atomic_write_bytes

if TYPE_CHECKING:
    from collections.abc import Callable

    from mitt_formula.formula.http import HttpClient
    from mitt_formula.formula.model import AssetEntry

__all__ = ["Fetcher", "FetchError", "sha256_bytes", "verify_digest"]

FetchError = NetworkError | IntegrityMismatch


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def verify_digest(url: str, data: bytes, expected: str) -> Result[bytes, IntegrityMismatch]:
    """Compare the SHA-256 of data with expected (case-insensitive)."""
    actual = sha256_bytes(data)
    if actual != expected.strip().lower():
        return Err(IntegrityMismatch(url=url, expected=expected, actual=actual))
    return Ok(data)


class Fetcher:
    """Downloads and verifies release assets.

    Only verified bytes ever leave this class or reach the cache. A cache
    entry whose digest no longer matches is deleted and fetched again.

    Usage:
        fetcher = Fetcher(RealHttpClient(), cache_dir)
        result = fetcher.fetch_and_verify(asset)
        if is_ok(result):
            installer.install(result.value, bin_dir, ...)
    """

    def __init__(self, http: HttpClient, cache_dir: Path | None = None) -> None:
        self._http = http
        self._cache_dir = cache_dir
        self.cache_error: OSError | None = None

    @property
    def cache_dir(self) -> Path | None:
        return self._cache_dir

    def cache_key(self, url: str) -> str:
        """Cache file name: short URL hash + original file name.

        Example: ".../v0.4.0/mitt-linux-x86_64.tar.gz" -> "a1b2c3d4_mitt-linux-x86_64.tar.gz"
        """
        filename = Path(urlparse(url).path).name or "download"
        url_hash = hashlib.sha256(url.encode()).hexdigest()[:8]
        return f"{url_hash}_{filename}"

    def cache_path(self, url: str) -> Path | None:
        if self._cache_dir is None:
            return None
        return self._cache_dir / self.cache_key(url)

    def clear_cache(self) -> int:
        """Remove every cached download; returns the number of files removed."""
        if self._cache_dir is None or not self._cache_dir.is_dir():
            return 0
        count = 0
        for file in self._cache_dir.iterdir():
            if file.is_file():
                file.unlink()
                count += 1
        return count

    def fetch_and_verify(
        self,
        asset: AssetEntry,
        *,
        force: bool = False,
        progress: Callable[[int, int], None] | None = None,
    ) -> Result[bytes, FetchError]:
        """Download asset.url and check it against asset.sha256.

        Args:
            asset: Entry to fetch
            force: Ignore any cached copy
            progress: Optional callback(downloaded_bytes, total_bytes)

        Returns:
            Ok with the verified bytes, Err(NetworkError) on transport failure,
            Err(IntegrityMismatch) when the digest differs
        """
        cached = self.cache_path(asset.url)
        if cached is not None and not force and cached.exists():
            hit = verify_digest(asset.url, cached.read_bytes(), asset.sha256)
            if isinstance(hit, Ok):
                return hit
            cached.unlink(missing_ok=True)

        downloaded = self._http.get_bytes(asset.url, progress=progress)
        if isinstance(downloaded, Err):
            return downloaded

        verified = verify_digest(asset.url, downloaded.value, asset.sha256)
        if isinstance(verified, Err):
            return verified

        if cached is not None:
            try:
                atomic_write_bytes(cached, verified.value)
            except OSError as e:
                # Cache is optional; the bytes are already verified.
                self.cache_error = e
        return verified
