"""Release data model.

This module defines the immutable records the installer works with:
- PlatformKey: closed (OS, arch) pair, four supported values
- ReleaseDescriptor: formula metadata for one published version
- AssetEntry: download URL and SHA-256 digest (or placeholder) for one platform
- Release: a descriptor plus exactly one AssetEntry per supported platform
- InstalledBinary: the verified executable placed on disk
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from mitt_formula.platform.detection import Arch, Platform

__all__ = [
    "BINARY_NAME",
    "PlatformKey",
    "SUPPORTED_PLATFORMS",
    "ReleaseDescriptor",
    "AssetEntry",
    "Release",
    "InstalledBinary",
    "asset_file_name",
    "is_placeholder_digest",
    "is_sha256",
    "version_key",
]

BINARY_NAME = "mitt"

_SEMVER = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?$")
# Stands in for the digest of an asset that is not published yet.
_PLACEHOLDER = re.compile(r"^PLACEHOLDER_[A-Z0-9_]+$")

# Upstream asset names spell arm64 as aarch64.
_ARCH_TOKENS = {
    Arch.X86_64: "x86_64",
    Arch.ARM64: "aarch64",
}


def is_sha256(value: str) -> bool:
    """True for a 64-char lowercase hex digest."""
    if len(value) != 64:
        return False
    return all(ch in "0123456789abcdef" for ch in value)


def is_placeholder_digest(value: str) -> bool:
    """True for a ``PLACEHOLDER_*`` marker in place of a digest."""
    return _PLACEHOLDER.match(value) is not None


def version_key(version: str) -> tuple[int, int, int, int, str]:
    """Sort key for semantic versions; a pre-release sorts before its release.

    Raises:
        ValueError: if version is not MAJOR.MINOR.PATCH[-PRE]
    """
    match = _SEMVER.match(version)
    if match is None:
        raise ValueError(f"Invalid semantic version: {version!r}")
    major, minor, patch, pre = match.groups()
    return (int(major), int(minor), int(patch), 0 if pre else 1, pre or "")


@dataclass(frozen=True, slots=True)
class PlatformKey:
    """Target (OS, architecture) pair."""

    os: Platform
    arch: Arch

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"

    @property
    def is_supported(self) -> bool:
        return self in SUPPORTED_PLATFORMS


SUPPORTED_PLATFORMS: tuple[PlatformKey, ...] = (
    PlatformKey(Platform.MACOS, Arch.ARM64),
    PlatformKey(Platform.MACOS, Arch.X86_64),
    PlatformKey(Platform.LINUX, Arch.ARM64),
    PlatformKey(Platform.LINUX, Arch.X86_64),
)


def asset_file_name(key: PlatformKey) -> str:
    """Release asset file name, e.g. ``mitt-linux-x86_64.tar.gz``."""
    if not key.is_supported:
        raise ValueError(f"No release asset for platform {key}")
    return f"{BINARY_NAME}-{key.os}-{_ARCH_TOKENS[key.arch]}.tar.gz"


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """Formula metadata for one published version."""

    name: str
    version: str
    license: str
    description: str = ""
    homepage: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Release name cannot be empty")
        version_key(self.version)


@dataclass(frozen=True, slots=True)
class AssetEntry:
    """Downloadable archive for one platform of one release."""

    platform: PlatformKey
    url: str
    sha256: str

    def __post_init__(self) -> None:
        if not self.url.startswith(("https://", "http://")):
            raise ValueError(f"Asset URL must be http(s): {self.url!r}")
        if not (is_sha256(self.sha256) or is_placeholder_digest(self.sha256)):
            raise ValueError(
                f"Invalid checksum for {self.platform}: expected 64-char SHA256 hex"
            )

    @property
    def file_name(self) -> str:
        return self.url.rsplit("/", 1)[-1]

    @property
    def is_published(self) -> bool:
        """False while the digest is still a placeholder."""
        return is_sha256(self.sha256)


@dataclass(frozen=True, slots=True)
class Release:
    """One row of the release table.

    Invariants (checked on construction):
    - exactly one AssetEntry per supported PlatformKey
    - each entry is stored under its own platform key
    - each URL embeds the release tag ``v<version>``
    """

    descriptor: ReleaseDescriptor
    assets: Mapping[PlatformKey, AssetEntry] = field(hash=False)

    def __post_init__(self) -> None:
        version = self.descriptor.version
        missing = [str(k) for k in SUPPORTED_PLATFORMS if k not in self.assets]
        if missing:
            raise ValueError(f"Release {version} is missing assets for: {', '.join(missing)}")
        extra = [str(k) for k in self.assets if not k.is_supported]
        if extra:
            raise ValueError(f"Release {version} has assets for unsupported: {', '.join(extra)}")

        tag = f"/v{version}/"
        for key, entry in self.assets.items():
            if entry.platform != key:
                raise ValueError(f"Asset for {entry.platform} stored under {key}")
            if tag not in entry.url:
                raise ValueError(
                    f"Asset URL for {key} does not embed version {version}: {entry.url}"
                )

    @property
    def version(self) -> str:
        return self.descriptor.version

    def asset(self, key: PlatformKey) -> AssetEntry | None:
        return self.assets.get(key)


@dataclass(frozen=True, slots=True)
class InstalledBinary:
    """Verified executable placed on disk."""

    path: Path
    version: str
    platform: PlatformKey
