#!/usr/bin/env python3
"""
slugify.py
----------
Record id slugs derived from note titles.

Latin accents are folded to ASCII (``Café`` → ``cafe``); letters of other
scripts are kept, so ``日本語 メモ`` becomes ``日本語-メモ`` rather than an
empty slug.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata


SEPARATOR_RE = re.compile(r"[\W_]+")


def _fold(char: str) -> str:
    """Strip combining marks when that leaves ASCII; otherwise keep the letter."""
    base = "".join(
        c for c in unicodedata.normalize("NFKD", char) if not unicodedata.combining(c)
    )
    return base if base.isascii() else unicodedata.normalize("NFKC", char)


def slugify(text: str, max_length: int = 200) -> str:
    """
    Lowercase, hyphen-separated slug of ``text``.

    Apostrophes vanish (``Bob's`` → ``bobs``), ``&`` reads as ``and``, and
    every other run of non-word characters becomes a single hyphen.

    Examples:
        >>> slugify("Café & Bar (v2)")
        'cafe-and-bar-v2'
        >>> slugify("api_gateway/proxy")
        'api-gateway-proxy'
        >>> slugify("???")
        ''
    """
    folded = "".join(_fold(char) for char in unicodedata.normalize("NFC", text)).lower()
    folded = folded.replace("'", "").replace("\u2019", "").replace("&", " and ")
    slug = SEPARATOR_RE.sub("-", folded).strip("-")
    return slug[:max_length].rstrip("-")
