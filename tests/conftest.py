"""Shared test fixtures for omst tests."""

import pytest

from omst import config as omst_config

STANDARD_LOGIN_DEFS = b"""\
#
# /etc/login.defs - Configuration control definitions for the login package.
#
MAIL_DIR        /var/mail
PASS_MAX_DAYS   99999

#
# Min/max values for automatic uid selection in useradd
#
UID_MIN                  1000
UID_MAX                 60000
# System accounts
#SYS_UID_MIN              100
#SYS_UID_MAX              999
"""


@pytest.fixture
def login_defs(tmp_path):
    """Factory writing bytes to a login.defs file and returning its path."""

    def _write(content: bytes = STANDARD_LOGIN_DEFS):
        path = tmp_path / "login.defs"
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def missing_path(tmp_path):
    """Path to a file that does not exist."""
    return tmp_path / "does-not-exist" / "login.defs"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's ~/.omst.toml and OMST_* variables out of tests."""
    monkeypatch.setattr(omst_config, "GLOBAL_CONFIG", tmp_path / "home" / ".omst.toml")
    for name in ("OMST_LOGIN_DEFS", "OMST_ON_ERROR", "OMST_VERBOSITY", "OMST_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
