# src/tweetparser/render.py
"""Pure formatting of an ExtractionResult for the CLI and the HTTP service."""
from __future__ import annotations

from tweetparser.extractors.base import ExtractionResult


def render_payload(result: ExtractionResult) -> str:
    return result.payload


def render_console(result: ExtractionResult) -> str:
    lines = ["", "Tweet Text:"]
    lines.extend(result.segments)
    lines += ["", "Media Links:"]
    lines.extend(result.media_links)
    lines += ["", "Result:", result.payload]
    return "\n".join(lines)
