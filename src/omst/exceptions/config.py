"""Configuration exceptions: omst's own settings, not login.defs."""

from typing import Any, Optional
from pathlib import Path

from .base import OmstError


class ConfigurationError(OmstError):
    """Raised when omst settings cannot be loaded or are invalid."""

    def __init__(self, message: str, path: Optional[Path] = None):
        details = {"path": str(path)} if path is not None else None
        super().__init__(message, details=details)
        self.path = path


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(f"Invalid configuration for {key}: {value!r} ({reason})")
        self.key = key
        self.value = value
        self.reason = reason
