"""Keyword extraction over web-search text about one editor.

Plain substring and regex heuristics; nothing here calls out to a model.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

SOFTWARE_SKILLS: tuple[str, ...] = (
    "Avid Media Composer",
    "Avid",
    "Final Cut Pro",
    "Premiere Pro",
    "DaVinci Resolve",
    "Color Correction",
    "Sound Design",
    "Motion Graphics",
    "Visual Effects",
)

AWARD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Emmy Award", re.compile(r"\bemmy(?:\s+award)?s?\b", re.IGNORECASE)),
    ("ACE Eddie Award", re.compile(r"\bace\s+eddie\b", re.IGNORECASE)),
    ("BAFTA", re.compile(r"\bbafta\b", re.IGNORECASE)),
    ("Guild Award", re.compile(r"\bguild\s+award\b", re.IGNORECASE)),
)

STYLE_KEYWORDS: tuple[str, ...] = (
    "collaborative",
    "detail-oriented",
    "creative",
    "innovative",
    "experienced",
    "professional",
)

_BIO_TERMS = ("editor", "editing", "television", "emmy")
_QUOTED = re.compile(r"[\"“]([^\"”]{2,80})[\"”]")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def _unique(values: Iterable[str], limit: int) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value and value not in seen:
            seen[value] = None
    return list(seen)[:limit]


def combined_text(items: Iterable[dict]) -> str:
    return " ".join(str(i.get("markdown") or i.get("text") or "") for i in items)


def extract_biography(text: str, editor_name: str) -> str:
    """First two sentences naming the editor in an editing context."""
    name = editor_name.lower()
    sentences = [
        s.strip() for s in _SENTENCE_END.split(text)
        if name in s.lower() and any(t in s.lower() for t in _BIO_TERMS)
    ]
    return " ".join(sentences[:2])


def extract_projects(text: str, limit: int = 10) -> list[str]:
    """Quoted titles, in order of appearance."""
    return _unique((m.strip() for m in _QUOTED.findall(text)), limit)


def extract_awards(text: str, limit: int = 5) -> list[str]:
    return [label for label, pattern in AWARD_PATTERNS if pattern.search(text)][:limit]


def extract_skills(text: str, limit: int = 8) -> list[str]:
    lowered = text.lower()
    found = [s for s in SOFTWARE_SKILLS if s.lower() in lowered]
    # "Avid" alone is redundant next to "Avid Media Composer".
    if "Avid Media Composer" in found and "Avid" in found:
        found.remove("Avid")
    return found[:limit]


def extract_work_style(text: str) -> list[str]:
    lowered = text.lower()
    return [k for k in STYLE_KEYWORDS if k in lowered]
