"""Binary extraction and installation.

This module provides an Installer class that:
- Opens a verified .tar.gz blob in memory
- Locates the single ``mitt`` executable entry (at any depth)
- Rejects unsafe member paths and non-regular entries
- Writes the binary atomically into the bin directory with mode 0o755
"""

from __future__ import annotations

import io
import tarfile
import zlib
from pathlib import Path, PurePosixPath

from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import ExtractionError
from mitt_formula.formula.model import BINARY_NAME, InstalledBinary, PlatformKey
from mitt_formula.platform.files import atomic_write_bytes

__all__ = ["Installer", "EXECUTABLE_MODE"]

EXECUTABLE_MODE = 0o755


class Installer:
    """Installs the executable contained in a release archive.

    Usage:
        installer = Installer()
        result = installer.install(blob, bin_dir, version="0.4.0", platform=key)
        if is_ok(result):
            print(f"Installed {result.value.path}")
    """

    def __init__(self, binary_name: str = BINARY_NAME) -> None:
        self._binary_name = binary_name

    @property
    def binary_name(self) -> str:
        return self._binary_name

    def _safe_member_path(self, member_name: str) -> PurePosixPath | None:
        """Return the normalized member path, or None if unsafe."""
        normalized = member_name.replace("\\", "/")
        if normalized.startswith("/"):
            return None
        posix = PurePosixPath(normalized)
        parts = [p for p in posix.parts if p != "."]
        if not parts:
            return PurePosixPath(".")
        if any(part in {"", ".."} for part in parts):
            return None
        if parts[0].endswith(":"):
            return None
        return PurePosixPath(*parts)

    def install(
        self,
        blob: bytes,
        target_dir: Path,
        *,
        version: str,
        platform: PlatformKey,
        archive_name: str = "archive.tar.gz",
    ) -> Result[InstalledBinary, ExtractionError]:
        """Extract the executable from blob into target_dir.

        Args:
            blob: Verified archive bytes
            target_dir: Bin directory receiving the executable
            version: Release version being installed
            platform: Platform the asset was resolved for
            archive_name: Name used in error messages

        Returns:
            Ok with InstalledBinary, or Err(ExtractionError) when the archive
            is unreadable or does not contain exactly one executable entry
        """
        try:
            with tarfile.open(fileobj=io.BytesIO(blob), mode="r:gz") as tar:
                matches: list[tarfile.TarInfo] = []
                for member in tar.getmembers():
                    path = self._safe_member_path(member.name)
                    if path is None:
                        return Err(
                            ExtractionError(
                                archive=archive_name,
                                message=f"Unsafe archive member {member.name!r}",
                            )
                        )
                    if path.name != self._binary_name or member.isdir():
                        continue
                    if not member.isreg():
                        return Err(
                            ExtractionError(
                                archive=archive_name,
                                message=f"{member.name!r} is not a regular file",
                            )
                        )
                    matches.append(member)

                if len(matches) != 1:
                    return Err(
                        ExtractionError(
                            archive=archive_name,
                            message=(
                                f"Expected exactly one {self._binary_name!r} entry, "
                                f"found {len(matches)}"
                            ),
                        )
                    )

                src = tar.extractfile(matches[0])
                if src is None:
                    return Err(
                        ExtractionError(archive=archive_name, message="Unreadable binary entry")
                    )
                with src:
                    data = src.read()

            target = target_dir / self._binary_name
            atomic_write_bytes(target, data, mode=EXECUTABLE_MODE)
            return Ok(InstalledBinary(path=target, version=version, platform=platform))

        except (tarfile.TarError, EOFError, zlib.error) as e:
            return Err(ExtractionError(archive=archive_name, message=f"Tar extraction failed: {e}"))
        except OSError as e:
            return Err(ExtractionError(archive=archive_name, message=f"IO error: {e}"))

    def uninstall(self, target_dir: Path) -> bool:
        """Remove the installed executable.

        Returns:
            True if removed, False if it didn't exist
        """
        target = target_dir / self._binary_name
        if target.is_file() or target.is_symlink():
            target.unlink()
            return True
        return False
