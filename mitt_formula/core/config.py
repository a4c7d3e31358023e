"""Typed installer configuration.

Configuration is optional. Without a file every field keeps its default;
with ``--config FILE`` an ``[install]`` table overrides them:

    [install]
    bin_dir = "~/bin"
    cache_dir = "~/.cache/mitt-formula/downloads"
    timeout = 60
    self_test = true

Paths left unset stay ``None`` and are filled in from the user's platform
directories by InstallService.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from mitt_formula import __version__

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "InstallerConfig",
    "ConfigError",
    "load_config",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"mitt-formula/{__version__}"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class InstallerConfig:
    """Installer settings.

    Attributes:
        bin_dir: Directory receiving the ``mitt`` executable (None: user default)
        cache_dir: Download cache directory (None: user default)
        timeout: Network timeout in seconds
        user_agent: User-Agent header sent with downloads
        self_test: Run ``mitt --help`` after installing
    """

    bin_dir: Path | None = None
    cache_dir: Path | None = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    self_test: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> InstallerConfig:
        """Create config from a parsed TOML mapping.

        Raises:
            ValueError: if a value has the wrong type or is out of range
        """
        install: StrDict = get_table(data, "install") or {}

        timeout = DEFAULT_TIMEOUT
        if "timeout" in install:
            parsed = get_float(install, "timeout")
            if parsed is None or parsed <= 0:
                raise ValueError("install.timeout must be a positive number")
            timeout = parsed

        self_test = True
        if "self_test" in install:
            flag = get_bool(install, "self_test")
            if flag is None:
                raise ValueError("install.self_test must be a boolean")
            self_test = flag

        bin_dir = get_str(install, "bin_dir")
        cache_dir = get_str(install, "cache_dir")
        return cls(
            bin_dir=Path(bin_dir).expanduser() if bin_dir else None,
            cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
            timeout=timeout,
            user_agent=get_str(install, "user_agent") or DEFAULT_USER_AGENT,
            self_test=self_test,
        )

    def with_overrides(
        self,
        *,
        bin_dir: Path | None = None,
        cache_dir: Path | None = None,
        self_test: bool | None = None,
    ) -> InstallerConfig:
        """Return a copy with CLI-level overrides applied (None keeps the value)."""
        return replace(
            self,
            bin_dir=bin_dir if bin_dir is not None else self.bin_dir,
            cache_dir=cache_dir if cache_dir is not None else self.cache_dir,
            self_test=self_test if self_test is not None else self.self_test,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[InstallerConfig, ConfigError]:
    """Load and parse installer configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(InstallerConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(InstallerConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
