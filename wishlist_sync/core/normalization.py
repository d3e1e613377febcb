"""Game title normalization.

Catalog titles differ mostly by edition/remaster suffixes and punctuation, so
names are canonicalized aggressively before any comparison. The trade-off is a
small number of false positives, which is accepted.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

# Characters outside this class are dropped. '&' is emitted by the "and"
# replacement and must survive a second pass; the '#' left by the leading
# "number" rewrite is stripped right away.
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9 &]")

_LEADING_NUMBER = re.compile(r"^number\b")

TOKEN_REPLACEMENTS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\band\b"), "&"),
    (re.compile(r"\bvi\b"), "6"),
]

FILLER_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\bonline\b"),
    re.compile(r"\bedition\b"),
    re.compile(r"\bremastered\b"),
    re.compile(r"\bdefinitive\b"),
    re.compile(r"\bgame of the year\b"),
]


def _normalize_once(text: str) -> str:
    text = text.lower()
    text = unicodedata.normalize("NFC", text)
    text = _LEADING_NUMBER.sub("#", text)
    text = _DISALLOWED_CHARS.sub("", text)
    for pattern, replacement in TOKEN_REPLACEMENTS:
        text = pattern.sub(replacement, text)
    for pattern in FILLER_PATTERNS:
        text = pattern.sub("", text)
    return text.strip()


def normalize_name(name: Optional[str]) -> str:
    """Canonicalize a game title for comparison.

    Never raises. ``None``, empty and whitespace-only input give ``""``.

    Steps, in order: lowercase, NFC composition, leading ``number`` -> ``#``,
    drop characters outside ``[a-z0-9 ]``, ``and`` -> ``&``, ``vi`` -> ``6``,
    remove filler words (online, edition, remastered, definitive,
    game of the year), trim.

    Removing a filler word can expose a new leading token, so the pass is
    repeated until the text stops changing. After the first pass every pass
    that changes the text shortens it, which bounds the loop.

    Examples:
        "Counter-Strike" -> "counterstrike"
        "Final Fantasy VI" -> "final fantasy 6"
        "Number One" -> "one"
        "The Witcher 3: Wild Hunt - Game of the Year Edition" -> "the witcher 3 wild hunt"
    """
    if not name:
        return ""
    if not isinstance(name, str):
        name = str(name)

    current = name
    while True:
        result = _normalize_once(current)
        if result == current:
            return result
        current = result


@dataclass(frozen=True)
class NormalizedName:
    """A raw title paired with its normalized form."""

    raw: str
    normalized: str

    @classmethod
    def of(cls, raw: Optional[str]) -> "NormalizedName":
        raw = raw or ""
        return cls(raw=raw, normalized=normalize_name(raw))

    def equals(self, other: "NormalizedName") -> bool:
        return self.normalized == other.normalized

    def __str__(self) -> str:
        return self.raw
