"""Persisting small integer values, such as level progress, to plain text files."""

from __future__ import annotations

import os
import re

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"[+-]?\d+")


def save_value(path: str | os.PathLike[str], value: int) -> bool:
    """Write ``value`` as decimal text to ``path``.

    Returns True when the file was written and False when it could not be
    opened. A failed write is not an error here.
    """
    try:
        with open(path, "w", encoding="ascii") as handle:
            handle.write(str(int(value)))
    except OSError:
        return False
    return True


def load_value(path: str | os.PathLike[str], default: int) -> int:
    """Read an integer previously stored with :func:`save_value`.

    A missing or unreadable file, or one holding only whitespace, yields
    ``default``. Text that does not start with a number yields 0. Only the
    leading number is used, and it is clamped to the 32-bit signed range.
    """
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            text = handle.read()
    except OSError:
        return default

    text = text.lstrip()
    if not text:
        return default

    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return max(_INT_MIN, min(_INT_MAX, int(match.group())))