# src/tweetparser/pipeline.py
"""Wiring shared by the CLI and the HTTP service."""
from __future__ import annotations

from tweetparser.config import Settings
from tweetparser.extractors.tweet import TweetExtractor
from tweetparser.fetchers.browser import BrowserFetcher


def build_fetcher(settings: Settings) -> BrowserFetcher:
    return BrowserFetcher(
        timeout_seconds=settings.browser.timeout_seconds,
        headless=settings.browser.headless,
    )


def build_extractor(settings: Settings, fetcher: BrowserFetcher) -> TweetExtractor:
    return TweetExtractor(
        fetcher,
        text_selector=settings.extraction.text_selector,
        media=settings.extraction.fingerprint(),
        wait_timeout_seconds=settings.browser.wait_timeout_seconds,
    )
