"""Data models for omst.

Everything here is created fresh for a single classification call and
thrown away afterwards; nothing is cached between calls.

Example:
    >>> Tier.USER.be()
    '$'
    >>> Tier.from_byte(Tier.SYSTEM.byte())
    <Tier.SYSTEM: 'system'>
    >>> UidRange(1000, 60000).classify(999)
    <Tier.SYSTEM: 'system'>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .exceptions import ClassificationError

# uid_t is an unsigned 32-bit integer on every supported POSIX system
UID_LIMIT = 2**32 - 1


@total_ordering
class Tier(Enum):
    """Summary of a user's permissions.

    This indicator is purely informational and must not be relied on for
    any kind of security decision.

    Tiers compare by ascending privilege:
    UNKNOWN < GUEST < USER < SYSTEM < ABSOLUTE.

    - UNKNOWN: classification failed; only produced by the degrading entry
      points, with details logged.
    - GUEST: restricted users. On POSIX this is at least ``nobody`` (any UID
      above ``UID_MAX``); on Windows, accounts with guest privileges.
    - USER: ordinary users representing a real person.
    - SYSTEM: service accounts, i.e. UIDs below ``UID_MIN``. Not produced
      on Windows.
    - ABSOLUTE: root on POSIX, administrators on Windows.
    """

    UNKNOWN = "unknown"
    GUEST = "guest"
    USER = "user"
    SYSTEM = "system"
    ABSOLUTE = "absolute"

    def byte(self) -> int:
        """The tier as a single ASCII byte value."""
        return ord(_SYMBOLS[self])

    def be(self) -> str:
        """The tier as a single character, e.g. ``'#'`` for root."""
        return _SYMBOLS[self]

    def display(self) -> str:
        """The tier as a lowercase word."""
        return self.value

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return _RANKS[self] < _RANKS[other]

    @classmethod
    def from_byte(cls, value: int) -> "Tier":
        """Inverse of :meth:`byte`."""
        for tier, symbol in _SYMBOLS.items():
            if ord(symbol) == value:
                return tier
        raise ValueError(f"{value:#x} is not a tier symbol")

    @classmethod
    def from_symbol(cls, symbol: str) -> "Tier":
        """Inverse of :meth:`be`."""
        if len(symbol) != 1:
            raise ValueError(f"tier symbols are one character, got {symbol!r}")
        return cls.from_byte(ord(symbol))


_SYMBOLS = {
    Tier.UNKNOWN: "?",
    Tier.GUEST: "%",
    Tier.USER: "$",
    Tier.SYSTEM: "@",
    Tier.ABSOLUTE: "#",
}

_RANKS = {tier: rank for rank, tier in enumerate(Tier)}


class Definition(Enum):
    """The two login.defs keys that bound the ordinary-user UID range."""

    MIN = "UID_MIN"
    MAX = "UID_MAX"

    @property
    def key(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class Problem(Enum):
    """What is wrong with a definition."""

    MISSING = "missing"
    EMPTY = "empty"
    INVALID = "invalid"


class Operation(Enum):
    """Operation that failed while gathering the data to classify."""

    OPEN = "open"
    READ = "read"
    GET_USER_NAME = "get username"
    GET_USER_INFO = "get user info"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UidRange:
    """Inclusive ``UID_MIN..=UID_MAX`` range of ordinary user IDs.

    ``min > max`` is not rejected; the file is trusted as written.
    """

    min: int
    max: int

    def classify(self, uid: int) -> Tier:
        """Map a non-root UID onto a tier."""
        if uid < self.min:
            return Tier.SYSTEM
        if uid > self.max:
            return Tier.GUEST
        return Tier.USER


@dataclass(frozen=True)
class Classification:
    """Outcome of a classification that reports failure as a value.

    Exactly one of ``tier`` and ``error`` is set.
    """

    tier: Optional[Tier] = None
    error: Optional["ClassificationError"] = None

    def __post_init__(self) -> None:
        if (self.tier is None) == (self.error is None):
            raise ValueError("Classification needs exactly one of tier or error")

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def tier_or_unknown(self) -> Tier:
        return self.tier if self.tier is not None else Tier.UNKNOWN

    def be(self) -> str:
        """Symbol for the tier, ``'?'`` on error."""
        return self.tier_or_unknown().be()

    def display(self) -> str:
        """Word for the tier, ``'unknown'`` on error."""
        return self.tier_or_unknown().display()
