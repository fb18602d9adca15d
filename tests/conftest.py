from __future__ import annotations

from contextlib import asynccontextmanager
from typing import List, Optional

import pytest

from tweetparser.errors import NavigationFailure, TimeoutFailure

TWEET_HTML = """
<html><body>
  <article>
    <img class="css-9pa8cd" src="https://pbs.twimg.com/profile_images/123.jpg">
    <div data-testid="tweetText">Check this out<!-- -->https://t.co/abc<!-- -->: amazing</div>
    <div data-testid="tweetText"><span>Nested</span><a href="https://t.co/x">https://t.co/x</a></div>
    <div data-testid="tweetText">   </div>
    <img class="css-9pa8cd" src="https://pbs.twimg.com/media/xyz.jpg">
    <img class="css-9pa8cd">
    <img class="other" src="https://pbs.twimg.com/media/ignored.jpg">
  </article>
</body></html>
"""


class FakeSession:
    def __init__(self, html: str, *, fail_navigate: bool = False, fail_wait: bool = False) -> None:
        self.html = html
        self.fail_navigate = fail_navigate
        self.fail_wait = fail_wait
        self.calls: List[str] = []

    async def navigate(self, url: str) -> None:
        self.calls.append(f"navigate {url}")
        if self.fail_navigate:
            raise NavigationFailure(f"Failed to load {url}: net::ERR_NAME_NOT_RESOLVED")

    async def wait_for_selector(self, selector: str, timeout_seconds: float) -> None:
        self.calls.append(f"wait {selector} {timeout_seconds:g}")
        if self.fail_wait:
            raise TimeoutFailure(f"{selector!r} did not appear within {timeout_seconds:g}s")

    async def rendered_html(self) -> str:
        self.calls.append("html")
        return self.html


class FakeFetcher:
    """Stands in for BrowserFetcher; records session open/close."""

    def __init__(self, session: FakeSession) -> None:
        self._session = session
        self.opened = 0
        self.closed = 0
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> "FakeFetcher":
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited = True

    @asynccontextmanager
    async def session(self):
        self.opened += 1
        try:
            yield self._session
        finally:
            self.closed += 1


@pytest.fixture
def tweet_html() -> str:
    return TWEET_HTML


@pytest.fixture
def make_fetcher():
    def _make(html: Optional[str] = None, **kwargs) -> FakeFetcher:
        return FakeFetcher(FakeSession(TWEET_HTML if html is None else html, **kwargs))
    return _make
