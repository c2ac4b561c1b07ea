"""Classification errors: everything that stops us from resolving a tier.

Each error renders as a single line naming the resource, the operation that
failed and, for bad values, the offending raw bytes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import Definition, Operation, Problem
from .base import OmstError


_ESCAPES = {0x09: "\\t", 0x0A: "\\n", 0x0D: "\\r", 0x5C: "\\\\"}


def escape_bytes(raw: bytes) -> str:
    """Render raw bytes as printable ASCII, escaping everything else."""
    parts = []
    for byte in raw:
        if byte in _ESCAPES:
            parts.append(_ESCAPES[byte])
        elif 0x20 <= byte < 0x7F:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02x}")
    return "".join(parts)


class ClassificationError(OmstError):
    """Base class for failures while classifying the current user."""

    pass


class ConfigReadError(ClassificationError):
    """Raised when the UID range file cannot be opened or read."""

    def __init__(self, operation: Operation, path: Path, error: OSError):
        reason = error.strerror or str(error)
        super().__init__(f"could not {operation} {path}: {reason}")
        self.operation = operation
        self.path = path
        self.error = error


class DefinitionError(ClassificationError):
    """Raised when UID_MIN or UID_MAX is missing, empty or not a valid UID."""

    def __init__(
        self,
        definition: Definition,
        problem: Problem,
        raw: Optional[bytes] = None,
        path: Optional[Path] = None,
    ):
        source = str(path) if path is not None else "login.defs"
        if problem is Problem.MISSING:
            message = f"{definition.key} not defined in {source}"
        elif problem is Problem.EMPTY:
            message = f"{definition.key} defined in {source} without a value"
        else:
            message = (
                f"{definition.key} in {source}: "
                f"{escape_bytes(raw or b'')} was not a valid UID"
            )
        super().__init__(message)
        self.definition = definition
        self.problem = problem
        self.raw = raw
        self.path = path


class NativeQueryError(ClassificationError):
    """Raised when a Windows identity or user-info call fails."""

    def __init__(self, operation: Operation, error: OSError):
        reason = error.strerror or str(error)
        super().__init__(f"could not {operation} due to error: {reason}")
        self.operation = operation
        self.error = error

    @property
    def code(self) -> Optional[int]:
        """Platform error code, when the OS supplied one."""
        winerror = getattr(self.error, "winerror", None)
        return winerror if winerror is not None else self.error.errno


class InvalidPrivilegeError(ClassificationError):
    """Raised when the user-info record holds an unknown privilege level."""

    def __init__(self, code: int):
        super().__init__(f"user privileges had invalid value ({code:#x})")
        self.code = code
