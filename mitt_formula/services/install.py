"""Install pipeline for one host: resolve, fetch, verify, extract, self-test.

The receipt written next to the binary is the record of a completed install.
It is removed before a new binary is written and saved again only once that
binary has passed its self-test.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mitt_formula.core.config import InstallerConfig
from mitt_formula.core.result import Err, Ok, Result
from mitt_formula.formula.errors import InstallError, SelfTestFailed
from mitt_formula.formula.fetch import Fetcher
from mitt_formula.formula.http import HttpClient, RealHttpClient
from mitt_formula.formula.installer import Installer
from mitt_formula.formula.model import AssetEntry, InstalledBinary, PlatformKey, Release
from mitt_formula.formula.receipt import (
    InstallReceipt,
    load_receipt,
    remove_receipt,
    save_receipt,
)
from mitt_formula.formula.resolver import resolve_asset
from mitt_formula.formula.selftest import SelfTestReport, run_self_test
from mitt_formula.formula.table import ReleaseTable, load_default_table
from mitt_formula.output.console import ConsoleProtocol, Style
from mitt_formula.platform.detection import HostInfo
from mitt_formula.platform.paths import default_bin_dir, default_cache_dir


@dataclass(frozen=True, slots=True)
class Resolution:
    release: Release
    asset: AssetEntry

    @property
    def platform(self) -> PlatformKey:
        return self.asset.platform


class InstallService:
    """Runs resolve -> fetch -> verify -> extract -> test for one host.

    Every stage is terminal on failure. Verification happens inside
    Fetcher.fetch_and_verify, so the installer only ever sees verified bytes.
    """

    def __init__(
        self,
        *,
        config: InstallerConfig,
        host: HostInfo,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        table: ReleaseTable | None = None,
    ) -> None:
        self._config = config
        self._host = host
        self._console = console
        self._http = (
            http
            if http is not None
            else RealHttpClient(timeout=config.timeout, user_agent=config.user_agent)
        )
        self._table = table if table is not None else load_default_table()
        self._installer = Installer()

    @property
    def table(self) -> ReleaseTable:
        return self._table

    @property
    def bin_dir(self) -> Path:
        return self._config.bin_dir or default_bin_dir()

    @property
    def cache_dir(self) -> Path:
        return self._config.cache_dir or default_cache_dir()

    def resolve(self, version: str | None = None) -> Result[Resolution, InstallError]:
        """Pick the release row and the host's asset. No network access."""
        release = self._table.get(version) if version else self._table.latest()
        if isinstance(release, Err):
            return release

        asset = resolve_asset(release.value, self._host.platform, self._host.arch)
        if isinstance(asset, Err):
            return asset
        return Ok(Resolution(release=release.value, asset=asset.value))

    def install(
        self,
        version: str | None = None,
        *,
        force: bool = False,
    ) -> Result[InstalledBinary, InstallError]:
        resolved = self.resolve(version)
        if isinstance(resolved, Err):
            return resolved
        release, asset = resolved.value.release, resolved.value.asset
        bin_dir = self.bin_dir
        target = bin_dir / self._installer.binary_name

        receipt = load_receipt(bin_dir)
        if (
            not force
            and receipt is not None
            and receipt.version == release.version
            and receipt.sha256 == asset.sha256
            and target.exists()
        ):
            self._console.print(f"mitt {release.version} already installed: {target}", Style.DIM)
            return Ok(
                InstalledBinary(path=target, version=release.version, platform=asset.platform)
            )

        self._console.print(f"install mitt {release.version} ({asset.platform})", Style.DIM)
        self._console.print(f"download {asset.url}", Style.DIM)
        fetcher = Fetcher(self._http, self.cache_dir)
        blob = fetcher.fetch_and_verify(asset, force=force)
        if isinstance(blob, Err):
            return blob
        if fetcher.cache_error is not None:
            self._console.warning(f"download not cached: {fetcher.cache_error}")
        self._console.print(f"sha256 verified: {asset.sha256}", Style.DIM)

        remove_receipt(bin_dir)
        installed = self._installer.install(
            blob.value,
            bin_dir,
            version=release.version,
            platform=asset.platform,
            archive_name=asset.file_name,
        )
        if isinstance(installed, Err):
            return installed

        if self._config.self_test:
            tested = run_self_test(installed.value, timeout=self._config.timeout)
            if isinstance(tested, Err):
                return tested
            self._console.print("self-test passed (mitt --help)", Style.DIM)

        save_receipt(
            bin_dir,
            InstallReceipt.now(
                version=release.version,
                platform=str(asset.platform),
                url=asset.url,
                sha256=asset.sha256,
            ),
        )
        self._console.success(f"mitt {release.version} installed: {installed.value.path}")
        return installed

    def self_test(self) -> Result[SelfTestReport, SelfTestFailed]:
        """Re-run the help-output smoke test on the installed binary."""
        target = self.bin_dir / self._installer.binary_name
        receipt = load_receipt(self.bin_dir)
        installed = InstalledBinary(
            path=target,
            version=receipt.version if receipt else "unknown",
            platform=PlatformKey(self._host.platform, self._host.arch),
        )
        if not target.exists():
            return Err(
                SelfTestFailed(
                    path=target, returncode=-1, output="", message="mitt is not installed"
                )
            )
        return run_self_test(installed, timeout=self._config.timeout)

    def status(self) -> InstallReceipt | None:
        receipt = load_receipt(self.bin_dir)
        if receipt is None:
            return None
        if not (self.bin_dir / self._installer.binary_name).exists():
            return None
        return receipt

    def uninstall(self, *, purge_cache: bool = False) -> bool:
        """Remove the binary and its receipt. Returns False if nothing was installed.

        With purge_cache, cached downloads are deleted as well.
        """
        if purge_cache:
            purged = Fetcher(self._http, self.cache_dir).clear_cache()
            self._console.print(f"removed {purged} cached download(s)", Style.DIM)
        removed_binary = self._installer.uninstall(self.bin_dir)
        removed_receipt = remove_receipt(self.bin_dir)
        if removed_binary or removed_receipt:
            self._console.success(f"mitt removed from {self.bin_dir}")
            return True
        self._console.print(f"mitt is not installed in {self.bin_dir}", Style.DIM)
        return False
