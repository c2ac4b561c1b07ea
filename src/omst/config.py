"""Configuration loading for omst.

Configuration sources are merged in priority order:
    1. Defaults (defined in OmstConfig)
    2. Global config (~/.omst.toml)
    3. Explicit config file (--config)
    4. Environment variables (OMST_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, on_error="unknown")
    >>> config.verbosity
    'verbose'
    >>> config.degrade_on_error
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .login_defs import LOGIN_DEFS

# Type aliases for clarity
Verbosity = Literal["quiet", "normal", "verbose"]
OnError = Literal["fail", "unknown"]

_VERBOSITIES = ("quiet", "normal", "verbose")
_ON_ERROR = ("fail", "unknown")

GLOBAL_CONFIG = Path("~/.omst.toml")


@dataclass(frozen=True)
class OmstConfig:
    """Settings for a classification run.

    Attributes:
        login_defs: File holding UID_MIN/UID_MAX (POSIX only).
        on_error: "fail" reports errors and exits non-zero; "unknown"
            prints the unknown tier and exits zero.
        verbosity: quiet/normal/verbose logging.
        log_file: Optional file to append log records to.
    """

    login_defs: Path = LOGIN_DEFS
    on_error: OnError = "fail"
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.login_defs, Path):
            object.__setattr__(self, "login_defs", Path(self.login_defs))
        if self.on_error not in _ON_ERROR:
            raise InvalidConfigError("on_error", self.on_error, "expected fail or unknown")
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def degrade_on_error(self) -> bool:
        return self.on_error == "unknown"


def load_config(config_file: Optional[Path] = None, **overrides) -> OmstConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset options don't mask files.

    Returns:
        Validated OmstConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    # 1. Global config
    global_config = GLOBAL_CONFIG.expanduser()
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    # 2. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError("Config file not found", path=config_file)
        merged.update(_load_toml_file(config_file))

    # 3. Environment variables
    merged.update(_load_env_vars())

    # 4. CLI overrides
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    try:
        return OmstConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from OMST_* environment variables.

    Supported environment variables:
        OMST_LOGIN_DEFS: path
        OMST_ON_ERROR: fail/unknown
        OMST_VERBOSITY: quiet/normal/verbose
        OMST_LOG_FILE: path
    """
    type_hints = get_type_hints(OmstConfig)
    result: dict[str, Any] = {}

    for field in fields(OmstConfig):
        env_key = f"OMST_{field.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        if not env_value:
            raise InvalidConfigError(env_key, env_value, "empty value")

        if type_hints[field.name] is Path:
            result[field.name] = Path(env_value)
        else:
            result[field.name] = env_value

    return result


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return its top-level table.

    Raises:
        ConfigurationError: If TOML support is missing or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file: {e}", path=path)
