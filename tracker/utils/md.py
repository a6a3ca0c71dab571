#!/usr/bin/env python3
"""
md.py
-------------------
Frontmatter splitting for project notes.

A note may open with a YAML block fenced by ``---`` lines. The YAML text
is returned as-is; parsing it is left to the caller.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import List, Tuple


BOM = "\ufeff"

# Opening fence on the first line, lazily up to the next fence line
FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*\r?$\n?",
    re.DOTALL | re.MULTILINE,
)


def split_frontmatter(content: str) -> Tuple[str, List[str]]:
    """
    Split a note into its frontmatter text and body lines.

    A leading byte order mark is ignored. Without an opening fence on the
    first line, or without a closing fence, the whole note is body.
    Blank lines between the closing fence and the body are dropped.

    Examples:
        >>> split_frontmatter("---\\nStack: [Go]\\n---\\n\\nBody text")
        ('Stack: [Go]', ['Body text'])
        >>> split_frontmatter("No fence")
        ('', ['No fence'])
    """
    if content.startswith(BOM):
        content = content[len(BOM):]

    match = FRONTMATTER_RE.match(content)
    if match is None:
        return "", content.splitlines()

    body = content[match.end():].lstrip("\r\n")
    return match.group("yaml").rstrip("\r\n"), body.splitlines()
