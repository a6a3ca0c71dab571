#!/usr/bin/env python3
"""
extractors.py
-------------------
Pure field extractors used by the note parser.

Functions:
    parse_heading_date: Resolve a ``## `` heading to a calendar day
    clean_markdown: Strip markdown decoration for display
    extract_learnings: Pick out bullet lines that record an insight or problem
    calculate_intensity: 1-4 heuristic of how much work a section represents
    detect_cost: First dollar amount mentioned in a section

None of these raise on odd input: a heading that is not a date yields
None, text with no learnings yields an empty list.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime
from typing import List, Optional, Sequence

# --- Local imports ---
from tracker.dataclasses.activity_record import MAX_INTENSITY


# ----- Heading dates -----
HEADING_MARKER_RE = re.compile(r"^##\s*")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EMBEDDED_ISO_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")
ORDINAL_SUFFIX_RE = re.compile(r"(?<=\d)(st|nd|rd|th)\b", re.IGNORECASE)
# "Jan." / "Thu." abbreviation periods
ABBREVIATION_PERIOD_RE = re.compile(r"(?<=[A-Za-z])\.")

NATURAL_DATE_FORMATS = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%d %b, %Y",
    "%d %B, %Y",
    "%a, %b %d, %Y",
    "%A, %B %d, %Y",
    "%a %b %d %Y",
    "%A %B %d %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y.%m.%d",
)


def _iso_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _natural_date(text: str) -> Optional[date]:
    """Parse phrases like ``Jan. 22, 2026`` or ``Thursday, January 22nd 2026``."""
    candidate = ABBREVIATION_PERIOD_RE.sub("", ORDINAL_SUFFIX_RE.sub("", text))
    candidate = " ".join(candidate.split())
    candidate = candidate.replace("Sept ", "Sep ")
    for fmt in NATURAL_DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    return None


def parse_heading_date(heading: str) -> Optional[date]:
    """
    Resolve a second-level heading to a calendar day.

    Tried in order: the whole heading as ``YYYY-MM-DD``; a ``YYYY-MM-DD``
    substring; a natural-language date phrase. Anything else, including
    impossible days such as ``2026-02-30``, yields None.

    Examples:
        >>> parse_heading_date("## 2026-01-22")
        datetime.date(2026, 1, 22)
        >>> parse_heading_date("## Day 3 (2026-01-24)")
        datetime.date(2026, 1, 24)
        >>> parse_heading_date("## Jan 22, 2026")
        datetime.date(2026, 1, 22)
        >>> parse_heading_date("## Random notes") is None
        True
    """
    text = HEADING_MARKER_RE.sub("", heading).strip()
    if not text:
        return None

    if ISO_DATE_RE.match(text):
        parsed = _iso_date(text)
        if parsed:
            return parsed

    for match in EMBEDDED_ISO_DATE_RE.finditer(text):
        parsed = _iso_date(match.group(1))
        if parsed:
            return parsed

    return _natural_date(text)


# ----- Markdown cleaning -----
IMAGE_EMBED_RE = re.compile(r"!\[\[.*?\]\]")
IMAGE_LINK_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
BOLD_STAR_RE = re.compile(r"\*\*(.*?)\*\*")
BOLD_UNDERSCORE_RE = re.compile(r"__(.*?)__")
ITALIC_STAR_RE = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
ITALIC_UNDERSCORE_RE = re.compile(r"_(?=\S)(.+?)(?<=\S)_")
BULLET_RE = re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE)
NUMBERED_RE = re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE)
HORIZONTAL_SPACE_RE = re.compile(r"[ \t]+")
BLANK_LINES_RE = re.compile(r"\n\s*\n")

BULLET_GLYPH = "• "


def _clean_once(text: str) -> str:
    text = IMAGE_EMBED_RE.sub("", text)
    text = IMAGE_LINK_RE.sub("", text)
    text = BOLD_STAR_RE.sub(r"\1", text)
    text = BOLD_UNDERSCORE_RE.sub(r"\1", text)
    text = ITALIC_STAR_RE.sub(r"\1", text)
    text = ITALIC_UNDERSCORE_RE.sub(r"\1", text)
    text = BULLET_RE.sub(BULLET_GLYPH, text)
    text = NUMBERED_RE.sub("", text)
    text = HORIZONTAL_SPACE_RE.sub(" ", text)
    text = BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def clean_markdown(text: str) -> str:
    """
    Strip markdown decoration from note text for display.

    Removes image embeds, unwraps bold/italic, turns ``-``/``*``/``+``
    bullets into ``•``, drops ``1.`` list numbers, collapses whitespace and
    blank-line runs, and trims. The rules are re-applied until the text is
    stable, so ``clean_markdown(clean_markdown(x)) == clean_markdown(x)``.

    Examples:
        >>> clean_markdown("- **Shipped** the _parser_\\n\\n\\n\\n1. next")
        '• Shipped the parser\\n\\nnext'
    """
    cleaned = _clean_once(text)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


# ----- Learnings -----
LEARNING_KEYWORDS = (
    "learning",
    "learned",
    "wondering",
    "issue",
    "problem",
    "should",
    "need to",
)
LIST_ITEM_RE = re.compile(r"^(?:[-*]|\d+\.)")
LIST_MARKER_RE = re.compile(r"^(?:[-*]\s*|\d+\.\s*)")


def extract_learnings(text: str) -> List[str]:
    """
    Collect list items that mention a learning, problem or open question.

    A line qualifies when, trimmed, it starts with ``-``, ``*`` or ``N.``
    and contains one of LEARNING_KEYWORDS (case-insensitive).

    Examples:
        >>> extract_learnings("- I learned that caching needs TTL eviction")
        ['I learned that caching needs TTL eviction']
        >>> extract_learnings("Plain prose about an issue")
        []
    """
    learnings: List[str] = []
    for line in text.splitlines():
        trimmed = line.strip()
        if not LIST_ITEM_RE.match(trimmed):
            continue
        lowered = trimmed.lower()
        if any(keyword in lowered for keyword in LEARNING_KEYWORDS):
            learnings.append(LIST_MARKER_RE.sub("", trimmed, count=1).strip())
    return learnings


# ----- Intensity -----
# (exclusive upper bound on content length, score)
INTENSITY_THRESHOLDS = ((500, 1), (1000, 2), (2000, 3))
LEARNING_BOOST_MIN = 3


def calculate_intensity(text: str, learnings: Sequence[str] = ()) -> int:
    """
    Score how much work a section represents, from 1 to 4.

    Base score from raw content length (<500 → 1, <1000 → 2, <2000 → 3,
    otherwise 4), plus one for three or more learnings, capped at 4.

    Examples:
        >>> calculate_intensity("x" * 1500, ["a", "b", "c"])
        4
    """
    score = MAX_INTENSITY
    for limit, value in INTENSITY_THRESHOLDS:
        if len(text) < limit:
            score = value
            break

    if len(learnings) >= LEARNING_BOOST_MIN:
        score = min(score + 1, MAX_INTENSITY)

    return score


# ----- Cost -----
COST_RE = re.compile(r"\$(\d+)")


def detect_cost(text: str) -> Optional[str]:
    """
    Return the first ``$<digits>`` amount in text, or None.

    Examples:
        >>> detect_cost("Spent $20 on API credits, then $5 more")
        '$20'
        >>> detect_cost("free tier") is None
        True
    """
    match = COST_RE.search(text)
    return f"${match.group(1)}" if match else None
