"""Versioned release table.

Each published version of mitt is one immutable Release row. Rows are only
ever appended; a new version supersedes the previous one without touching it.
The shipped table is ``mitt_formula/data/releases.toml``:

    [formula]
    name = "mitt"
    license = "MIT"

    [[releases]]
    version = "0.4.0"

    [[releases.assets]]
    os = "linux"
    arch = "x86_64"
    url = "https://.../v0.4.0/mitt-linux-x86_64.tar.gz"
    sha256 = "0b408d32..."

A platform whose asset is not published yet carries a ``PLACEHOLDER_*``
digest. Resolution refuses it instead of downloading something it cannot
verify.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.core.structured import StrDict, as_str_dict, get_list, get_str, get_table
from mitt_formula.formula.errors import UnknownVersion
from mitt_formula.formula.model import (
    SUPPORTED_PLATFORMS,
    AssetEntry,
    PlatformKey,
    Release,
    ReleaseDescriptor,
    is_placeholder_digest,
    version_key,
)
from mitt_formula.platform.detection import Arch, Platform, parse_arch, parse_platform

__all__ = [
    "FormulaInfo",
    "ReleaseTable",
    "default_table_path",
    "load_default_table",
    "render_release_toml",
]


def default_table_path() -> Path:
    return Path(__file__).parent.parent / "data" / "releases.toml"


@dataclass(frozen=True, slots=True)
class FormulaInfo:
    """Metadata shared by every row of the table."""

    name: str
    license: str
    description: str = ""
    homepage: str = ""

    def descriptor(self, version: str) -> ReleaseDescriptor:
        return ReleaseDescriptor(
            name=self.name,
            version=version,
            license=self.license,
            description=self.description,
            homepage=self.homepage,
        )


class ReleaseTable:
    """Append-only log of releases keyed by version.

    Usage:
        table = load_default_table()
        release = table.get("0.4.0")
        if is_ok(release):
            print(release.value.asset(key))
    """

    def __init__(self, info: FormulaInfo, releases: list[Release] | None = None) -> None:
        self._info = info
        self._rows: dict[str, Release] = {}
        for release in releases or []:
            self.append(release)

    @property
    def info(self) -> FormulaInfo:
        return self._info

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Release]:
        """Iterate rows oldest version first."""
        for version in self.versions():
            yield self._rows[version]

    def __contains__(self, version: object) -> bool:
        return version in self._rows

    def versions(self) -> list[str]:
        return sorted(self._rows, key=version_key)

    def append(self, release: Release) -> None:
        """Add a new version.

        Raises:
            ValueError: if the version already exists, the formula name differs,
                or an asset URL or digest of an earlier row is reused
        """
        version = release.version
        if release.descriptor.name != self._info.name:
            raise ValueError(
                f"Release {version} is for {release.descriptor.name!r}, not {self._info.name!r}"
            )
        if version in self._rows:
            raise ValueError(f"Release {version} already exists; publish a new version instead")

        for key in SUPPORTED_PLATFORMS:
            entry = release.assets[key]
            for previous in self._rows.values():
                earlier = previous.assets[key]
                if entry.url == earlier.url:
                    raise ValueError(
                        f"Release {version} reuses the {key} asset URL of {previous.version}"
                    )
                if entry.is_published and entry.sha256 == earlier.sha256:
                    raise ValueError(
                        f"Release {version} reuses the {key} checksum of {previous.version}"
                    )

        self._rows[version] = release

    def get(self, version: str) -> Result[Release, UnknownVersion]:
        release = self._rows.get(version.strip().removeprefix("v"))
        if release is None:
            return Err(UnknownVersion(version=version, available=tuple(self.versions())))
        return Ok(release)

    def latest(self) -> Result[Release, UnknownVersion]:
        versions = self.versions()
        if not versions:
            return Err(UnknownVersion(version="latest", available=()))
        return Ok(self._rows[versions[-1]])

    @classmethod
    def from_dict(cls, data: StrDict) -> ReleaseTable:
        """Build a table from parsed TOML.

        Raises:
            ValueError: on any malformed table, row, or asset
        """
        formula = get_table(data, "formula")
        if formula is None:
            raise ValueError("Missing [formula] table in release table")
        name = get_str(formula, "name")
        license_ = get_str(formula, "license")
        if not name or not license_:
            raise ValueError("[formula] requires name and license")
        info = FormulaInfo(
            name=name,
            license=license_,
            description=get_str(formula, "description") or "",
            homepage=get_str(formula, "homepage") or "",
        )

        table = cls(info)
        for index, row_obj in enumerate(get_list(data, "releases") or []):
            row = as_str_dict(row_obj)
            if row is None:
                raise ValueError(f"releases[{index}] must be a table")
            table.append(_parse_release(info, row, index))
        return table

    @classmethod
    def load(cls, path: Path) -> ReleaseTable:
        import tomllib

        with path.open("rb") as f:
            data_obj: object = tomllib.load(f)

        data = as_str_dict(data_obj)
        if data is None:
            raise ValueError("Invalid release table (expected a TOML table)")
        return cls.from_dict(data)


def _parse_release(info: FormulaInfo, row: StrDict, index: int) -> Release:
    version = get_str(row, "version")
    if not version:
        raise ValueError(f"releases[{index}] is missing version")

    assets: dict[PlatformKey, AssetEntry] = {}
    for asset_obj in get_list(row, "assets") or []:
        asset = as_str_dict(asset_obj)
        if asset is None:
            raise ValueError(f"Release {version}: asset entries must be tables")
        os_name = get_str(asset, "os") or ""
        arch_name = get_str(asset, "arch") or ""
        key = PlatformKey(parse_platform(os_name), parse_arch(arch_name))
        if key.os == Platform.UNKNOWN or key.arch == Arch.UNKNOWN:
            raise ValueError(f"Release {version}: unknown platform {os_name}/{arch_name}")
        if key in assets:
            raise ValueError(f"Release {version}: duplicate asset for {key}")

        url = get_str(asset, "url")
        digest = get_str(asset, "sha256")
        if not url or not digest:
            raise ValueError(f"Release {version}: asset {key} requires url and sha256")
        if not is_placeholder_digest(digest):
            digest = digest.lower()
        assets[key] = AssetEntry(platform=key, url=url, sha256=digest)

    return Release(descriptor=info.descriptor(version), assets=assets)


def load_default_table() -> ReleaseTable:
    return ReleaseTable.load(default_table_path())


def render_release_toml(release: Release) -> str:
    """Render a row in the table file format, ready to append."""
    lines = ["[[releases]]", f'version = "{release.version}"']
    for key in SUPPORTED_PLATFORMS:
        entry = release.assets[key]
        lines.extend(
            [
                "",
                "[[releases.assets]]",
                f'os = "{key.os}"',
                f'arch = "{key.arch}"',
                f'url = "{entry.url}"',
                f'sha256 = "{entry.sha256}"',
            ]
        )
    return "\n".join(lines) + "\n"
