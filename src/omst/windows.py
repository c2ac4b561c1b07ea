"""Classify the current user through the Windows ``NetUserGetInfo`` API.

The user name comes from ``GetUserNameW`` and is passed to
``NetUserGetInfo`` at level 1, which hands back a ``USER_INFO_1`` record
allocated by the network API. Its ``usri1_priv`` field is one of
``USER_PRIV_GUEST``, ``USER_PRIV_USER`` or ``USER_PRIV_ADMIN``, mapped to
:attr:`Tier.GUEST`, :attr:`Tier.USER` and :attr:`Tier.ABSOLUTE`.

The record must be returned with ``NetApiBufferFree`` exactly once.
:class:`UserInfoBuffer` owns it for the duration of a ``with`` block. If the
free itself fails the process heap can no longer be trusted, so the process
aborts instead of raising.
"""

from __future__ import annotations

import ctypes
import logging
import os
from typing import Any, Optional

from .exceptions import InvalidPrivilegeError, NativeQueryError
from .models import Operation, Tier

logger = logging.getLogger(__name__)

# lmcons.h
UNLEN = 256

# lmaccess.h
USER_PRIV_GUEST = 0
USER_PRIV_USER = 1
USER_PRIV_ADMIN = 2

NERR_SUCCESS = 0

PRIVILEGE_TIERS = {
    USER_PRIV_ADMIN: Tier.ABSOLUTE,
    USER_PRIV_GUEST: Tier.GUEST,
    USER_PRIV_USER: Tier.USER,
}


class NetApi:
    """ctypes binding for the handful of Win32 calls we need.

    Only constructible on Windows. Tests substitute an object with the same
    four methods.
    """

    def __init__(self) -> None:
        from ctypes import wintypes

        class USER_INFO_1(ctypes.Structure):
            _fields_ = [
                ("usri1_name", wintypes.LPWSTR),
                ("usri1_password", wintypes.LPWSTR),
                ("usri1_password_age", wintypes.DWORD),
                ("usri1_priv", wintypes.DWORD),
                ("usri1_home_dir", wintypes.LPWSTR),
                ("usri1_comment", wintypes.LPWSTR),
                ("usri1_flags", wintypes.DWORD),
                ("usri1_script_path", wintypes.LPWSTR),
            ]

        self._user_info_1 = USER_INFO_1

        advapi32 = ctypes.WinDLL("advapi32", use_last_error=True)
        netapi32 = ctypes.WinDLL("netapi32")

        self._get_user_name = advapi32.GetUserNameW
        self._get_user_name.argtypes = [wintypes.LPWSTR, wintypes.LPDWORD]
        self._get_user_name.restype = wintypes.BOOL

        self._net_user_get_info = netapi32.NetUserGetInfo
        self._net_user_get_info.argtypes = [
            wintypes.LPCWSTR,
            wintypes.LPCWSTR,
            wintypes.DWORD,
            ctypes.POINTER(ctypes.c_void_p),
        ]
        self._net_user_get_info.restype = wintypes.DWORD

        self._net_api_buffer_free = netapi32.NetApiBufferFree
        self._net_api_buffer_free.argtypes = [ctypes.c_void_p]
        self._net_api_buffer_free.restype = wintypes.DWORD

    def get_user_name(self) -> str:
        """Name of the user running this process.

        Raises:
            OSError: ``GetUserNameW`` failed; carries the last Win32 error.
        """
        from ctypes import wintypes

        size = wintypes.DWORD(UNLEN + 1)
        buf = ctypes.create_unicode_buffer(size.value)
        if not self._get_user_name(buf, ctypes.byref(size)):
            raise ctypes.WinError(ctypes.get_last_error())
        return buf.value

    def get_user_info(self, name: str) -> tuple[int, Optional[int]]:
        """Call ``NetUserGetInfo`` at level 1.

        Returns:
            ``(status, address)``; ``address`` is ``None`` unless a record
            was allocated.
        """
        ptr = ctypes.c_void_p()
        status = self._net_user_get_info(None, name, 1, ctypes.byref(ptr))
        return status, ptr.value

    def read_privilege(self, address: int) -> int:
        return self._user_info_1.from_address(address).usri1_priv

    def free(self, address: int) -> int:
        return self._net_api_buffer_free(address)

    @staticmethod
    def error_for(status: int) -> OSError:
        return ctypes.WinError(status)


class UserInfoBuffer:
    """Owns a record returned by ``NetUserGetInfo``.

    The record is freed once when the ``with`` block exits, whichever way
    it exits. A failed free aborts the process.
    """

    def __init__(self, api: Any, address: Optional[int]):
        self._api = api
        self._address = address

    def __enter__(self) -> "UserInfoBuffer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._address is None

    def privilege(self) -> int:
        if self._address is None:
            raise ValueError("user info record already released")
        return self._api.read_privilege(self._address)

    def close(self) -> None:
        address, self._address = self._address, None
        if address is None:
            return

        status = self._api.free(address)
        if status != NERR_SUCCESS:
            logger.critical("NetApiBufferFree failed with status %d; aborting", status)
            os.abort()


def classify(api: Any = None) -> Tier:
    """Classify the user running this process.

    Args:
        api: Win32 binding; defaults to a fresh :class:`NetApi`.

    Raises:
        NativeQueryError: Getting the user name or the user info failed.
        InvalidPrivilegeError: The privilege level is not one we know.
    """
    if api is None:
        api = NetApi()

    try:
        name = api.get_user_name()
    except OSError as e:
        raise NativeQueryError(Operation.GET_USER_NAME, e) from e

    status, address = api.get_user_info(name)
    with UserInfoBuffer(api, address) as info:
        if status != NERR_SUCCESS:
            raise NativeQueryError(Operation.GET_USER_INFO, api.error_for(status))

        privilege = info.privilege()
        logger.debug("User %s has privilege level %d", name, privilege)

        tier = PRIVILEGE_TIERS.get(privilege)
        if tier is None:
            raise InvalidPrivilegeError(privilege)
        return tier
