"""Tests for posix.py - effective UID classification."""

import pytest

from omst.exceptions import ConfigReadError, DefinitionError
from omst.models import Definition, Operation, Tier
from omst.posix import classify


def euid(value):
    return lambda: value


class TestRoot:
    """UID 0 is absolute without consulting login.defs."""

    def test_root_with_valid_file(self, login_defs):
        assert classify(login_defs(), geteuid=euid(0)) is Tier.ABSOLUTE

    def test_root_with_missing_file(self, missing_path):
        assert classify(missing_path, geteuid=euid(0)) is Tier.ABSOLUTE

    def test_root_with_broken_file(self, login_defs):
        path = login_defs(b"UID_MIN nope\n")
        assert classify(path, geteuid=euid(0)) is Tier.ABSOLUTE


class TestRangeMapping:
    """Non-root UIDs are placed against UID_MIN..=UID_MAX."""

    @pytest.mark.parametrize(
        "uid,expected",
        [
            (1, Tier.SYSTEM),
            (33, Tier.SYSTEM),
            (999, Tier.SYSTEM),
            (1000, Tier.USER),
            (1234, Tier.USER),
            (60000, Tier.USER),
            (60001, Tier.GUEST),
            (65534, Tier.GUEST),
        ],
    )
    def test_standard_ranges(self, login_defs, uid, expected):
        assert classify(login_defs(), geteuid=euid(uid)) is expected

    def test_bsd_style_range(self, login_defs):
        path = login_defs(b"UID_MIN 500 # older systems\nUID_MAX 999\n")
        assert classify(path, geteuid=euid(499)) is Tier.SYSTEM
        assert classify(path, geteuid=euid(500)) is Tier.USER
        assert classify(path, geteuid=euid(1000)) is Tier.GUEST

    def test_default_uses_os_geteuid(self, login_defs, monkeypatch):
        import omst.posix

        monkeypatch.setattr(omst.posix.os, "geteuid", euid(1500), raising=False)
        assert classify(login_defs()) is Tier.USER


class TestErrorsPropagate:
    """Parser errors reach the caller unchanged."""

    def test_missing_file(self, missing_path):
        with pytest.raises(ConfigReadError) as exc:
            classify(missing_path, geteuid=euid(1000))
        assert exc.value.operation is Operation.OPEN

    def test_missing_definition(self, login_defs):
        with pytest.raises(DefinitionError) as exc:
            classify(login_defs(b"UID_MIN 1000\n"), geteuid=euid(1000))
        assert exc.value.definition is Definition.MAX
