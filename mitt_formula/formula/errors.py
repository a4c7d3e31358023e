from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """No usable asset for the host.

    unpublished_in names the release whose row still carries a placeholder
    digest for this platform; it is empty when the platform is not in the table.
    """

    os: str
    arch: str
    supported: tuple[str, ...]
    unpublished_in: str = ""

    def __str__(self) -> str:
        if self.unpublished_in:
            return (
                f"mitt {self.unpublished_in} is not yet published for {self.os}/{self.arch}"
            )
        return f"No release asset for platform {self.os}/{self.arch}"


@dataclass(frozen=True, slots=True)
class UnknownVersion:
    version: str
    available: tuple[str, ...]

    def __str__(self) -> str:
        return f"Unknown version: {self.version}"


@dataclass(frozen=True, slots=True)
class NetworkError:
    """Transport failure (status 0 when no HTTP response was received)."""

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class IntegrityMismatch:
    url: str
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"SHA256 mismatch for {self.url}: expected {self.expected}, got {self.actual}"


@dataclass(frozen=True, slots=True)
class ExtractionError:
    archive: str
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


@dataclass(frozen=True, slots=True)
class SelfTestFailed:
    path: Path
    returncode: int
    output: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.path}, exit {self.returncode})"


InstallError = (
    UnsupportedPlatform
    | UnknownVersion
    | NetworkError
    | IntegrityMismatch
    | ExtractionError
    | SelfTestFailed
)
