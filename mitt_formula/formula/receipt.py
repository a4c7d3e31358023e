"""Install receipt - what was installed, from where, and when.

The receipt is stored as ``<bin_dir>/.mitt-receipt.json`` next to the binary.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

from mitt_formula.core.structured import as_str_dict, get_str
from mitt_formula.platform.files import atomic_write_text

__all__ = [
    "InstallReceipt",
    "load_receipt",
    "save_receipt",
    "remove_receipt",
    "receipt_path",
]

RECEIPT_NAME = ".mitt-receipt.json"


@dataclass(frozen=True, slots=True)
class InstallReceipt:
    """Record of a completed install.

    Attributes:
        version: Installed version string
        platform: Platform key the asset was resolved for (e.g. "linux/x86_64")
        url: Asset URL the binary came from
        sha256: Verified digest of that asset
        installed_at: ISO timestamp of installation
    """

    version: str
    platform: str
    url: str
    sha256: str
    installed_at: str

    @classmethod
    def now(cls, *, version: str, platform: str, url: str, sha256: str) -> InstallReceipt:
        return cls(
            version=version,
            platform=platform,
            url=url,
            sha256=sha256,
            installed_at=datetime.now().isoformat(),
        )


def receipt_path(bin_dir: Path) -> Path:
    return bin_dir / RECEIPT_NAME


def load_receipt(bin_dir: Path) -> InstallReceipt | None:
    """Load the receipt, or None if missing or unreadable."""
    path = receipt_path(bin_dir)
    if not path.exists():
        return None

    try:
        data = as_str_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return None
    if data is None:
        return None

    version = get_str(data, "version")
    platform = get_str(data, "platform")
    url = get_str(data, "url")
    sha256 = get_str(data, "sha256")
    installed_at = get_str(data, "installed_at")
    if not (version and platform and url and sha256 and installed_at):
        return None
    return InstallReceipt(
        version=version,
        platform=platform,
        url=url,
        sha256=sha256,
        installed_at=installed_at,
    )


def save_receipt(bin_dir: Path, receipt: InstallReceipt) -> None:
    atomic_write_text(receipt_path(bin_dir), json.dumps(asdict(receipt), indent=2))


def remove_receipt(bin_dir: Path) -> bool:
    path = receipt_path(bin_dir)
    if path.exists():
        path.unlink()
        return True
    return False
