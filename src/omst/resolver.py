"""Entry points for classifying the current user.

The classifier for the running platform is chosen once, at import time:
``NetUserGetInfo`` on Windows, effective UID plus ``login.defs`` everywhere
else. Callers pick how failures are reported:

- :func:`classify_current_user` raises :class:`ClassificationError`.
- :func:`try_classify_current_user` returns a :class:`Classification`
  holding either the tier or the error.
- :func:`classify_current_user_or_unknown` logs the error and returns
  :attr:`Tier.UNKNOWN`.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from .config import OmstConfig
from .exceptions import ClassificationError
from .models import Classification, Tier

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"


def _classify_windows(config: OmstConfig) -> Tier:
    from . import windows

    return windows.classify()


def _classify_posix(config: OmstConfig) -> Tier:
    from . import posix

    return posix.classify(login_defs=config.login_defs)


_classify: Callable[[OmstConfig], Tier] = _classify_windows if IS_WINDOWS else _classify_posix


def classify_current_user(config: Optional[OmstConfig] = None) -> Tier:
    """Classify the current user, raising on failure.

    Raises:
        ClassificationError: The tier could not be determined.
    """
    return _classify(config or OmstConfig())


def try_classify_current_user(config: Optional[OmstConfig] = None) -> Classification:
    """Classify the current user, returning any failure as a value."""
    try:
        return Classification(tier=classify_current_user(config))
    except ClassificationError as e:
        return Classification(error=e)


def classify_current_user_or_unknown(config: Optional[OmstConfig] = None) -> Tier:
    """Classify the current user, degrading to :attr:`Tier.UNKNOWN` on failure."""
    result = try_classify_current_user(config)
    if result.error is not None:
        logger.error("%s", result.error)
    return result.tier_or_unknown()
