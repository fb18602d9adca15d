# src/tweetparser/extractors/tweet.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List
from urllib.parse import urlparse

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from tweetparser.errors import NavigationFailure
from tweetparser.extractors.base import BaseExtractor, ExtractionResult
from tweetparser.extractors.normalize import fix_colon_spacing, normalize_fragment
from tweetparser.fetchers.browser import BrowserFetcher

logger = logging.getLogger(__name__)

TWEET_TEXT_SELECTOR = 'div[data-testid="tweetText"]'


@dataclass(frozen=True)
class MediaFingerprint:
    """
    Identifies in-post media images.
    The class name and the avatar prefix follow the platform's markup, so they
    are configuration rather than code.
    """
    selector: str = "img.css-9pa8cd"
    excluded_prefix: str = "https://pbs.twimg.com/profile_images"

    def accepts(self, src: str) -> bool:
        return not src.startswith(self.excluded_prefix)


def validate_url(url: str) -> str:
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise NavigationFailure(f"Invalid URL: {url!r}")
    return url


def _select(soup: BeautifulSoup, selector: str) -> List[Tag]:
    try:
        return soup.select(selector)
    except SelectorSyntaxError as e:
        logger.warning("Ignoring malformed selector %r: %s", selector, e)
        return []


def _direct_text_nodes(container: Tag) -> List[str]:
    # Comments, CDATA, doctypes etc. are NavigableStrings too, skip them.
    # Whitespace-only nodes still count; join_text_nodes drops them later.
    return [
        str(child)
        for child in container.children
        if isinstance(child, NavigableString)
        and not isinstance(child, PreformattedString)
    ]


class TweetExtractor(BaseExtractor):
    """
    Extracts:
    - post text (one normalized string per post-text container)
    - media links (fingerprinted <img> elements minus profile images)
    Uses a browser session to render the page; parsing is plain BeautifulSoup.
    """

    def __init__(
        self,
        fetcher: BrowserFetcher,
        *,
        text_selector: str = TWEET_TEXT_SELECTOR,
        media: MediaFingerprint = MediaFingerprint(),
        wait_timeout_seconds: float = 30,
    ) -> None:
        self._fetcher = fetcher
        self._text_selector = text_selector
        self._media = media
        self._wait_timeout = wait_timeout_seconds

    async def extract(self, link: str, **kwargs) -> ExtractionResult:
        url = validate_url(link)

        async with self._fetcher.session() as session:
            await session.navigate(url)
            await session.wait_for_selector(self._text_selector, self._wait_timeout)
            html = await session.rendered_html()

        return self.extract_from_html(html)

    def extract_from_html(self, html: str) -> ExtractionResult:
        soup = BeautifulSoup(html, "lxml")

        segments = self.extract_texts(soup)
        media_links = self.extract_media_links(soup)

        logger.info("Extracted post: segments=%d media=%d", len(segments), len(media_links))

        return ExtractionResult(
            # a segment may start with a colon, so re-punctuate across the joins
            text=fix_colon_spacing(" ".join(segments)).strip(),
            media_links=tuple(media_links),
            segments=tuple(segments),
        )

    def extract_texts(self, soup: BeautifulSoup) -> List[str]:
        texts = []
        for container in _select(soup, self._text_selector):
            pieces = _direct_text_nodes(container)
            if not pieces:
                # text nested in <span>/<a> wrappers; <img alt> emoji are not text nodes
                pieces = list(container.stripped_strings)

            text = normalize_fragment(pieces)
            if text:
                texts.append(text)
        return texts

    def extract_media_links(self, soup: BeautifulSoup) -> List[str]:
        links = []
        for img in _select(soup, self._media.selector):
            src = img.get("src")
            if src is None:
                continue
            if self._media.accepts(src):
                links.append(src)
        return links
