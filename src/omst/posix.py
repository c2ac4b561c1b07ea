"""Classify the current user from the effective UID and ``login.defs``.

UID 0 is always root and always :attr:`Tier.ABSOLUTE`, without reading
anything. Every other UID is placed against the ``UID_MIN..=UID_MAX`` range
from ``login.defs``: below it are system accounts, inside it are ordinary
users, above it are ``nobody`` and guest accounts.

``login.defs`` also defines ``SYS_UID_MIN..=SYS_UID_MAX`` and
``SUB_UID_MIN..=SUB_UID_MAX``, but these rarely cover the full UID space and
are ignored.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from .login_defs import LOGIN_DEFS, load_uid_range
from .models import Tier

logger = logging.getLogger(__name__)

ROOT_UID = 0


def classify(
    login_defs: Union[str, Path] = LOGIN_DEFS,
    geteuid: Optional[Callable[[], int]] = None,
) -> Tier:
    """Classify the effective user of this process.

    Args:
        login_defs: File holding ``UID_MIN``/``UID_MAX``.
        geteuid: Source of the effective UID; defaults to :func:`os.geteuid`.

    Raises:
        ConfigReadError: ``login_defs`` could not be opened or read.
        DefinitionError: ``login_defs`` lacks a usable UID range.
    """
    euid = (geteuid or os.geteuid)()
    if euid == ROOT_UID:
        logger.debug("Effective UID is root")
        return Tier.ABSOLUTE

    uid_range = load_uid_range(login_defs)
    tier = uid_range.classify(euid)
    logger.debug(
        "Effective UID %d against %d..=%d: %s", euid, uid_range.min, uid_range.max, tier
    )
    return tier
