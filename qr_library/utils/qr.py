"""
QR token handling.

Two kinds of lookup exist:
- structured: the token carries ``<prefix><book id>`` (used when borrowing),
- fallback: the scanned value is reduced to a bare token name and matched
  against stored ``qr_code`` values (used when returning).
"""
from __future__ import annotations

import posixpath
import re
import uuid

from qr_library.errors import InvalidInputError


def generate_token(book_id: int, prefix: str = "book_") -> str:
    return f"{prefix}{book_id}_{uuid.uuid4().hex[:12]}"


def parse_book_token(token: str, prefix: str = "book_") -> int:
    """Extract the numeric book id from a structured token (``book_12``, ``book_12_ab.png``)."""
    match = re.search(re.escape(prefix) + r"(\d+)", token or "")
    if not match:
        raise InvalidInputError("Invalid QR code")
    return int(match.group(1))


def strip_token(token: str) -> str:
    """``/scans/book_7abc.png`` -> ``book_7abc``."""
    name = posixpath.basename((token or "").strip().replace("\\", "/"))
    stem, _ext = posixpath.splitext(name)
    return stem
