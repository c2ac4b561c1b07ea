"""Parse the ordinary-user UID range out of ``login.defs``.

``login.defs`` (see ``login.defs(5)``, shipped by shadow-utils) is a flat
file of ``KEY VALUE`` lines. Only ``UID_MIN`` and ``UID_MAX`` matter here:
together they bound the UIDs handed out to ordinary users.

The scan is byte-oriented and deliberately simple:

1. Everything from the *last* ``#`` on a line is a comment. A ``#`` inside
   a value therefore truncates it (``UID_MIN 1000#5`` reads as ``1000``).
2. Leading whitespace is skipped; lines with nothing left are ignored.
3. The key runs up to the first whitespace; unknown keys are ignored.
4. The value is the next whitespace-delimited token; its leading decimal
   digits (after an optional ``+``) must fit in ``uid_t``.

Later definitions of a key override earlier ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from .exceptions import ConfigReadError, DefinitionError
from .models import UID_LIMIT, Definition, Operation, Problem, UidRange

logger = logging.getLogger(__name__)

LOGIN_DEFS = Path("/etc/login.defs")

# Same set as Rust's u8::is_ascii_whitespace; vertical tab is not included.
_WHITESPACE = frozenset(b" \t\n\r\x0c")

_KEYS = {definition.key.encode("ascii"): definition for definition in Definition}


def _find_space(buf: bytes) -> int:
    for pos, byte in enumerate(buf):
        if byte in _WHITESPACE:
            return pos
    return -1


def _skip_space(buf: bytes) -> bytes:
    for pos, byte in enumerate(buf):
        if byte not in _WHITESPACE:
            return buf[pos:]
    return b""


def split_line(line: bytes) -> Optional[Tuple[bytes, bytes]]:
    """Split a line into ``(key, value)``.

    Returns ``None`` for lines that are blank once the comment is removed.
    The value is ``b""`` when the key has nothing after it.
    """
    comment = line.rfind(b"#")
    if comment != -1:
        line = line[:comment]

    line = _skip_space(line)
    if not line:
        return None

    space = _find_space(line)
    if space == -1:
        return line, b""
    key, rest = line[:space], _skip_space(line[space:])

    end = _find_space(rest)
    if end != -1:
        rest = rest[:end]
    return key, rest


def parse_uid(raw: bytes) -> Optional[int]:
    """Parse a UID from the leading decimal digits of ``raw``.

    An optional ``+`` may come first and anything after the digits is
    ignored, so ``b"1000abc"`` and ``b"+1000"`` both read as 1000. Returns
    ``None`` when there are no digits or the number does not fit ``uid_t``.
    """
    digits = raw[1:] if raw.startswith(b"+") else raw
    end = 0
    while end < len(digits) and 0x30 <= digits[end] <= 0x39:
        end += 1
    if end == 0:
        return None
    uid = int(digits[:end])
    if uid > UID_LIMIT:
        return None
    return uid


def parse_uid_range(lines: Iterable[bytes], path: Optional[Path] = None) -> UidRange:
    """Read ``UID_MIN`` and ``UID_MAX`` from an iterable of byte lines.

    Args:
        lines: Lines of the file, with or without trailing newlines.
        path: Where the lines came from, used only in error messages.

    Returns:
        The inclusive ordinary-user range.

    Raises:
        DefinitionError: A definition is empty or not a valid UID (raised
            at the offending line), or is missing once input is exhausted.
        OSError: Propagated from ``lines`` if iterating it fails.
    """
    found: Dict[Definition, int] = {}

    for line in lines:
        split = split_line(line)
        if split is None:
            continue
        key, value = split

        definition = _KEYS.get(key)
        if definition is None:
            continue

        if not value:
            raise DefinitionError(definition, Problem.EMPTY, path=path)

        uid = parse_uid(value)
        if uid is None:
            raise DefinitionError(definition, Problem.INVALID, raw=value, path=path)

        if definition in found:
            logger.debug("%s redefined: %d -> %d", definition, found[definition], uid)
        found[definition] = uid

    for definition in Definition:
        if definition not in found:
            raise DefinitionError(definition, Problem.MISSING, path=path)

    return UidRange(found[Definition.MIN], found[Definition.MAX])


def load_uid_range(path: Union[str, Path] = LOGIN_DEFS) -> UidRange:
    """Load the ordinary-user UID range from a ``login.defs`` file.

    Raises:
        ConfigReadError: The file could not be opened or read.
        DefinitionError: See :func:`parse_uid_range`.
    """
    path = Path(path)
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise ConfigReadError(Operation.OPEN, path, e) from e

    with handle:
        try:
            uid_range = parse_uid_range(handle, path=path)
        except OSError as e:
            raise ConfigReadError(Operation.READ, path, e) from e

    logger.debug("Loaded UID range %d..=%d from %s", uid_range.min, uid_range.max, path)
    return uid_range
