"""Canonical comparison keys for dancer, orchestra and song names.

Keys are only ever used for equality checks; stored display names are never
rewritten with them.
"""

from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")


def _is_mark(char: str) -> bool:
    return unicodedata.category(char).startswith("M")


def normalize(name: str) -> str:
    """Return the accent-, case- and punctuation-insensitive key for ``name``.

    >>> normalize("  José  D'Arienzo ")
    'jose darienzo'
    """

    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(char for char in decomposed if not _is_mark(char))
    kept = _DISALLOWED.sub("", stripped.lower())
    # trim after cleanup: keys never start or end with a space
    return _WHITESPACE.sub(" ", kept).strip()


def same_name(left: str, right: str) -> bool:
    return normalize(left) == normalize(right)
