"""Release resolution, verification and installation for mitt.

This package provides the installer proper:
- Release model and versioned table (model.py, table.py)
- Platform-to-asset resolution (resolver.py)
- HTTP client and verified fetch (http.py, fetch.py)
- Extraction, self-test and receipt (installer.py, selftest.py, receipt.py)
- New-release row computation (bump.py)
"""

from mitt_formula.formula.errors import (
    ExtractionError,
    InstallError,
    IntegrityMismatch,
    NetworkError,
    SelfTestFailed,
    UnknownVersion,
    UnsupportedPlatform,
)
from mitt_formula.formula.fetch import Fetcher, sha256_bytes
from mitt_formula.formula.http import HttpClient, MockHttpClient, RealHttpClient
from mitt_formula.formula.installer import Installer
from mitt_formula.formula.model import (
    SUPPORTED_PLATFORMS,
    AssetEntry,
    InstalledBinary,
    PlatformKey,
    Release,
    ReleaseDescriptor,
)
from mitt_formula.formula.resolver import resolve_asset
from mitt_formula.formula.selftest import SelfTestReport, run_self_test
from mitt_formula.formula.table import ReleaseTable, load_default_table

__all__ = [
    # Model
    "AssetEntry",
    "InstalledBinary",
    "PlatformKey",
    "Release",
    "ReleaseDescriptor",
    "SUPPORTED_PLATFORMS",
    # Table
    "ReleaseTable",
    "load_default_table",
    # Errors
    "ExtractionError",
    "InstallError",
    "IntegrityMismatch",
    "NetworkError",
    "SelfTestFailed",
    "UnknownVersion",
    "UnsupportedPlatform",
    # Pipeline steps
    "resolve_asset",
    "Fetcher",
    "sha256_bytes",
    "Installer",
    "run_self_test",
    "SelfTestReport",
    # HTTP
    "HttpClient",
    "MockHttpClient",
    "RealHttpClient",
]
