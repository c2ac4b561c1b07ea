"""Exception hierarchy for omst."""

from .base import OmstError
from .classification import (
    ClassificationError,
    ConfigReadError,
    DefinitionError,
    InvalidPrivilegeError,
    NativeQueryError,
)
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "OmstError",
    "ClassificationError",
    "ConfigReadError",
    "DefinitionError",
    "NativeQueryError",
    "InvalidPrivilegeError",
    "ConfigurationError",
    "InvalidConfigError",
]
