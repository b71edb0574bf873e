"""Cursor encoding and decoding for pagination.

A cursor is the decimal string form of the last-seen row's id. Clients pass it
back unchanged to resume the id-ordered scan just past that row.

Decoding is lenient: a missing, blank or malformed cursor degrades to "first
page" instead of raising. Callers that need to know whether a cursor was
usable compare the decoded resume key with ``None``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")

# Resume keys are 64-bit signed ids in both stores
_MIN_KEY = -(2**63)
_MAX_KEY = 2**63 - 1


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode(42)      # "42"
        key = CursorCodec.decode("42")       # 42
        CursorCodec.decode("abc")            # raises ValueError
    """

    @staticmethod
    def encode(resume_key: int) -> str:
        """Encode a resume key to its cursor string."""
        return str(resume_key)

    @staticmethod
    def decode(cursor: str) -> int:
        """Decode a cursor string to its resume key.

        Args:
            cursor: Cursor string; surrounding whitespace is ignored.

        Returns:
            The integer resume key.

        Raises:
            ValueError: If the cursor is not a 64-bit integer.
        """
        text = cursor.strip()
        if not _INTEGER.fullmatch(text):
            msg = f"Invalid cursor format: {cursor!r}"
            raise ValueError(msg)

        value = int(text)
        if not _MIN_KEY <= value <= _MAX_KEY:
            msg = f"Cursor out of range: {cursor!r}"
            raise ValueError(msg)
        return value


def parse_cursor(cursor: str | None) -> int | None:
    """Decode a client cursor, failing open to the first page.

    Args:
        cursor: Raw cursor from the request, possibly None or blank.

    Returns:
        The resume key, or None when the scan should start from the beginning.

    Example:
        parse_cursor(None)     # None
        parse_cursor("  ")     # None
        parse_cursor(" 17 ")   # 17
        parse_cursor("abc")    # None (logged at WARNING)
    """
    if cursor is None or not cursor.strip():
        return None

    try:
        return CursorCodec.decode(cursor)
    except ValueError:
        logger.warning("Invalid cursor format, starting from first page", extra={"cursor": cursor})
        return None


def encode_cursor(resume_key: int | None) -> str | None:
    """Encode a resume key, passing None through."""
    return None if resume_key is None else CursorCodec.encode(resume_key)
