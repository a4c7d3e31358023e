"""Tests for mitt_formula.formula.table module."""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path

import pytest

from mitt_formula.core.result import Err, Ok
from mitt_formula.formula.model import (
    SUPPORTED_PLATFORMS,
    PlatformKey,
    Release,
    is_placeholder_digest,
    is_sha256,
)
from mitt_formula.formula.resolver import resolve_asset
from mitt_formula.formula.table import (
    FormulaInfo,
    ReleaseTable,
    load_default_table,
    render_release_toml,
)
from mitt_formula.platform.detection import Arch, Platform
from mitt_formula.test._support import (
    FORMULA_INFO,
    HOMEPAGE,
    build_archive,
    make_release,
    unpublished,
)

LINUX_X64 = PlatformKey(Platform.LINUX, Arch.X86_64)


class TestShippedTable:
    def test_loads(self) -> None:
        table = load_default_table()

        assert table.info.name == "mitt"
        assert table.info.license == "MIT"
        assert table.info.description == "Encrypted file transfer CLI tool"
        assert "0.4.0" in table

    def test_linux_x86_64_digest(self) -> None:
        release = load_default_table().get("0.4.0").unwrap()
        entry = release.asset(LINUX_X64)

        assert entry is not None
        assert entry.sha256 == "0b408d3226a5ac2387e498cc8b80967e44dd09eae21e3270ea0a102c1b8cb1f2"
        assert entry.url.endswith("/v0.4.0/mitt-linux-x86_64.tar.gz")

    def test_every_row_is_complete(self) -> None:
        for release in load_default_table():
            assert set(release.assets) == set(SUPPORTED_PLATFORMS)
            for entry in release.assets.values():
                assert is_sha256(entry.sha256) or is_placeholder_digest(entry.sha256)
                assert f"/v{release.version}/" in entry.url

    def test_unrecorded_checksums_are_not_published(self) -> None:
        release = load_default_table().get("0.4.0").unwrap()

        for key in SUPPORTED_PLATFORMS:
            entry = release.assets[key]
            assert entry.is_published == (key == LINUX_X64)
            if not entry.is_published:
                result = resolve_asset(release, key.os, key.arch)
                assert isinstance(result, Err)
                assert result.error.unpublished_in == "0.4.0"


class TestGet:
    def test_known_version(self) -> None:
        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0")])

        result = table.get("0.4.0")

        assert isinstance(result, Ok)
        assert result.value.version == "0.4.0"

    def test_accepts_tag_prefix(self) -> None:
        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0")])
        assert table.get("v0.4.0").is_ok()

    def test_only_one_tag_prefix_is_stripped(self) -> None:
        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0")])

        result = table.get("vv0.4.0")

        assert isinstance(result, Err)
        assert result.error.version == "vv0.4.0"

    def test_unknown_version(self) -> None:
        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0")])

        result = table.get("9.9.9")

        assert isinstance(result, Err)
        assert result.error.version == "9.9.9"
        assert result.error.available == ("0.4.0",)

    def test_latest_is_highest_version(self) -> None:
        table = ReleaseTable(
            FORMULA_INFO,
            [make_release("0.4.0"), make_release("0.10.0"), make_release("0.9.1")],
        )

        assert table.latest().unwrap().version == "0.10.0"
        assert table.versions() == ["0.4.0", "0.9.1", "0.10.0"]
        assert [r.version for r in table] == ["0.4.0", "0.9.1", "0.10.0"]

    def test_latest_empty_table(self) -> None:
        result = ReleaseTable(FORMULA_INFO).latest()

        assert isinstance(result, Err)
        assert result.error.version == "latest"


class TestAppend:
    def test_new_version_leaves_previous_row_untouched(self) -> None:
        first = make_release("0.4.0")
        table = ReleaseTable(FORMULA_INFO, [first])

        table.append(make_release("0.5.0"))

        assert len(table) == 2
        assert table.get("0.4.0").unwrap() == first

    def test_duplicate_version(self) -> None:
        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0")])

        with pytest.raises(ValueError, match="already exists"):
            table.append(make_release("0.4.0"))

    def test_reused_checksum(self) -> None:
        def empty_archive(_version: str, _key: PlatformKey) -> bytes:
            return build_archive({"mitt": b""})

        table = ReleaseTable(FORMULA_INFO, [make_release("0.4.0", blob_for=empty_archive)])

        with pytest.raises(ValueError, match="reuses the .* checksum of 0.4.0"):
            table.append(make_release("0.5.0", blob_for=empty_archive))

    def test_reused_url(self) -> None:
        shared_url = f"{HOMEPAGE}/releases/download/v0.4.0/v0.5.0/mitt-linux-x86_64.tar.gz"

        def with_shared_url(version: str) -> Release:
            release = make_release(version)
            assets = dict(release.assets)
            assets[LINUX_X64] = dataclasses.replace(assets[LINUX_X64], url=shared_url)
            return dataclasses.replace(release, assets=assets)

        table = ReleaseTable(FORMULA_INFO, [with_shared_url("0.4.0")])

        with pytest.raises(ValueError, match="reuses the linux/x86_64 asset URL of 0.4.0"):
            table.append(with_shared_url("0.5.0"))

    def test_placeholders_may_repeat_across_rows(self) -> None:
        macos_arm = PlatformKey(Platform.MACOS, Arch.ARM64)
        table = ReleaseTable(FORMULA_INFO, [unpublished(make_release("0.4.0"), macos_arm)])

        table.append(unpublished(make_release("0.5.0"), macos_arm))

        assert table.versions() == ["0.4.0", "0.5.0"]

    def test_wrong_formula_name(self) -> None:
        other = FormulaInfo(name="other", license="MIT", homepage=HOMEPAGE)

        with pytest.raises(ValueError, match="not 'other'"):
            ReleaseTable(other, [make_release("0.4.0")])


class TestLoad:
    def _write(self, tmp_path: Path, body: str) -> Path:
        path = tmp_path / "releases.toml"
        path.write_text('[formula]\nname = "mitt"\nlicense = "MIT"\n\n' + body)
        return path

    def test_round_trips_rendered_rows(self, tmp_path: Path) -> None:
        rows = [make_release("0.4.0"), make_release("0.5.0")]
        path = self._write(tmp_path, "\n".join(render_release_toml(r) for r in rows))

        table = ReleaseTable.load(path)

        assert table.versions() == ["0.4.0", "0.5.0"]
        assert table.get("0.5.0").unwrap().assets == rows[1].assets

    def test_placeholder_is_kept_verbatim(self, tmp_path: Path) -> None:
        release = unpublished(make_release("0.4.0"), LINUX_X64)
        path = self._write(tmp_path, render_release_toml(release))

        entry = ReleaseTable.load(path).get("0.4.0").unwrap().assets[LINUX_X64]

        assert entry.sha256 == "PLACEHOLDER_LINUX_X86_64_SHA256"
        assert not entry.is_published

    def test_unknown_platform(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            '[[releases]]\nversion = "0.4.0"\n\n[[releases.assets]]\n'
            'os = "plan9"\narch = "x86_64"\nurl = "https://x/v0.4.0/a"\nsha256 = "00"\n',
        )

        with pytest.raises(ValueError, match="unknown platform plan9/x86_64"):
            ReleaseTable.load(path)

    def test_missing_assets(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, '[[releases]]\nversion = "0.4.0"\n')

        with pytest.raises(ValueError, match="missing assets"):
            ReleaseTable.load(path)

    def test_missing_formula_table(self, tmp_path: Path) -> None:
        path = tmp_path / "releases.toml"
        path.write_text('[[releases]]\nversion = "0.4.0"\n')

        with pytest.raises(ValueError, match=r"\[formula\]"):
            ReleaseTable.load(path)


class TestRender:
    def test_is_valid_toml(self) -> None:
        release = make_release("0.4.0")

        data = tomllib.loads(render_release_toml(release))

        rows = data["releases"]
        assert rows[0]["version"] == "0.4.0"
        assert len(rows[0]["assets"]) == 4
        assert {a["arch"] for a in rows[0]["assets"]} == {"arm64", "x86_64"}

