# src/tweetparser/extractors/normalize.py
"""
Text normalization steps applied to each post-text container.

The order matters: pieces are joined first, then scheme prefixes are
stripped, then colons are re-punctuated.
"""
from __future__ import annotations

import re
from typing import Iterable

SCHEME_PREFIXES = ("https://", "http://")

_COLON_RE = re.compile(r"\s*:\s*")


def join_text_nodes(pieces: Iterable[str]) -> str:
    """Trim every piece, drop the blank ones and join the rest with one space."""
    trimmed = (p.strip() for p in pieces)
    return " ".join(p for p in trimmed if p)


def strip_url_schemes(text: str) -> str:
    """
    Remove literal `https://` and `http://` prefixes, keeping the rest of the
    link inline ("https://t.co/abc" -> "t.co/abc").
    This is lossy on purpose; it is not URL parsing.
    """
    # a removal can splice a new prefix together ("httpshttp://://"), so repeat
    while any(prefix in text for prefix in SCHEME_PREFIXES):
        for prefix in SCHEME_PREFIXES:
            text = text.replace(prefix, "")
    return text


def fix_colon_spacing(text: str) -> str:
    """Attach every colon to the preceding text and follow it with exactly one space."""
    return _COLON_RE.sub(": ", text)


def normalize_fragment(pieces: Iterable[str]) -> str:
    """Full pipeline for one container. Returns "" when nothing is left."""
    text = strip_url_schemes(join_text_nodes(pieces))
    return fix_colon_spacing(text).strip()
