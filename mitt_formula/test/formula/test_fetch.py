"""Tests for mitt_formula.formula.fetch module."""

from __future__ import annotations

from pathlib import Path

from mitt_formula.core.result import Err, Ok
from mitt_formula.formula.errors import IntegrityMismatch, NetworkError
from mitt_formula.formula.fetch import Fetcher, sha256_bytes, verify_digest
from mitt_formula.formula.http import MockHttpClient
from mitt_formula.formula.model import AssetEntry, PlatformKey
from mitt_formula.platform.detection import Arch, Platform
from mitt_formula.test._support import platform_archive

LINUX_X64 = PlatformKey(Platform.LINUX, Arch.X86_64)
URL = "https://github.com/no-way-labs/caldron/releases/download/v0.4.0/mitt-linux-x86_64.tar.gz"


def _asset(blob: bytes) -> AssetEntry:
    return AssetEntry(platform=LINUX_X64, url=URL, sha256=sha256_bytes(blob))


def _tamper(blob: bytes) -> bytes:
    return blob[:-1] + bytes([blob[-1] ^ 0x01])


class TestVerifyDigest:
    def test_match(self) -> None:
        data = b"mitt"
        assert verify_digest(URL, data, sha256_bytes(data)) == Ok(data)

    def test_uppercase_expected(self) -> None:
        data = b"mitt"
        assert verify_digest(URL, data, sha256_bytes(data).upper()).is_ok()

    def test_mismatch(self) -> None:
        result = verify_digest(URL, b"mitt", "0" * 64)

        assert isinstance(result, Err)
        assert result.error.expected == "0" * 64
        assert result.error.actual == sha256_bytes(b"mitt")


class TestFetchAndVerify:
    def test_returns_verified_bytes(self) -> None:
        blob = platform_archive("0.4.0", LINUX_X64)
        http = MockHttpClient()
        http.set_bytes(URL, blob)

        result = Fetcher(http).fetch_and_verify(_asset(blob))

        assert result == Ok(blob)
        assert http.calls == [URL]

    def test_single_byte_change_is_rejected(self) -> None:
        blob = platform_archive("0.4.0", LINUX_X64)
        http = MockHttpClient()
        http.set_bytes(URL, _tamper(blob))

        result = Fetcher(http).fetch_and_verify(_asset(blob))

        assert isinstance(result, Err)
        assert isinstance(result.error, IntegrityMismatch)
        assert result.error.url == URL

    def test_network_error_passes_through(self) -> None:
        http = MockHttpClient()
        http.set_bytes(URL, NetworkError(url=URL, status=503, message="Service Unavailable"))

        result = Fetcher(http).fetch_and_verify(_asset(b"x"))

        assert isinstance(result, Err)
        assert isinstance(result.error, NetworkError)
        assert result.error.status == 503

    def test_missing_asset_is_network_error(self) -> None:
        result = Fetcher(MockHttpClient()).fetch_and_verify(_asset(b"x"))

        assert isinstance(result, Err)
        assert isinstance(result.error, NetworkError)
        assert result.error.status == 404

    def test_progress_callback(self) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        seen: list[tuple[int, int]] = []

        Fetcher(http).fetch_and_verify(_asset(blob), progress=lambda d, t: seen.append((d, t)))

        assert seen == [(len(blob), len(blob))]


class TestCache:
    def test_cache_key(self, tmp_path: Path) -> None:
        key = Fetcher(MockHttpClient(), tmp_path).cache_key(URL)

        assert key.endswith("_mitt-linux-x86_64.tar.gz")
        assert len(key.split("_", 1)[0]) == 8

    def test_second_fetch_uses_cache(self, tmp_path: Path) -> None:
        blob = platform_archive("0.4.0", LINUX_X64)
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        fetcher = Fetcher(http, tmp_path)

        assert fetcher.fetch_and_verify(_asset(blob)) == Ok(blob)
        assert fetcher.fetch_and_verify(_asset(blob)) == Ok(blob)

        assert http.calls == [URL]

    def test_force_bypasses_cache(self, tmp_path: Path) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        fetcher = Fetcher(http, tmp_path)

        fetcher.fetch_and_verify(_asset(blob))
        fetcher.fetch_and_verify(_asset(blob), force=True)

        assert http.calls == [URL, URL]

    def test_corrupt_cache_entry_is_refetched(self, tmp_path: Path) -> None:
        blob = platform_archive("0.4.0", LINUX_X64)
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        fetcher = Fetcher(http, tmp_path)
        cached = fetcher.cache_path(URL)
        assert cached is not None
        cached.write_bytes(_tamper(blob))

        result = fetcher.fetch_and_verify(_asset(blob))

        assert result == Ok(blob)
        assert http.calls == [URL]
        assert cached.read_bytes() == blob

    def test_unverified_bytes_are_not_cached(self, tmp_path: Path) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, _tamper(blob))
        fetcher = Fetcher(http, tmp_path)

        assert fetcher.fetch_and_verify(_asset(blob)).is_err()

        cached = fetcher.cache_path(URL)
        assert cached is not None
        assert not cached.exists()

    def test_clear_cache(self, tmp_path: Path) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        fetcher = Fetcher(http, tmp_path / "cache")

        assert fetcher.clear_cache() == 0
        fetcher.fetch_and_verify(_asset(blob))
        assert fetcher.clear_cache() == 1
        assert list((tmp_path / "cache").iterdir()) == []

    def test_unwritable_cache_returns_verified_bytes(self, tmp_path: Path) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        blocker = tmp_path / "not-a-dir"
        blocker.write_bytes(b"")
        fetcher = Fetcher(http, blocker / "cache")

        result = fetcher.fetch_and_verify(_asset(blob))

        assert result == Ok(blob)
        assert isinstance(fetcher.cache_error, OSError)

    def test_cache_error_is_unset_after_clean_write(self, tmp_path: Path) -> None:
        blob = b"payload"
        http = MockHttpClient()
        http.set_bytes(URL, blob)
        fetcher = Fetcher(http, tmp_path)

        fetcher.fetch_and_verify(_asset(blob))

        assert fetcher.cache_error is None
