# src/tweetparser/fetchers/browser.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from tweetparser.errors import ExtractionError, NavigationFailure, TimeoutFailure

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


class BrowserSession:
    """
    One tab driven by exactly one extraction.
    Translates Playwright errors into NavigationFailure / TimeoutFailure.
    """

    def __init__(self, page: Page, *, timeout_seconds: float = 30) -> None:
        self._page = page
        self._timeout = timeout_seconds * 1000  # Playwright uses milliseconds

    async def navigate(self, url: str) -> None:
        logger.info("Browser GET %s", url)
        try:
            response = await self._page.goto(url, timeout=self._timeout, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as e:
            raise NavigationFailure(f"Timed out loading {url}") from e
        except PlaywrightError as e:
            raise NavigationFailure(f"Failed to load {url}: {e.message}") from e

        # None means same-document navigation; there is no status to check
        if response is not None and response.status >= 400:
            raise NavigationFailure(f"Page returned status={response.status} url={url}")

    async def wait_for_selector(self, selector: str, timeout_seconds: float) -> None:
        try:
            await self._page.wait_for_selector(selector, state="attached", timeout=timeout_seconds * 1000)
        except PlaywrightTimeoutError as e:
            raise TimeoutFailure(f"{selector!r} did not appear within {timeout_seconds:g}s") from e
        except PlaywrightError as e:
            raise NavigationFailure(f"Page failed while waiting for {selector!r}: {e.message}") from e

    async def rendered_html(self) -> str:
        try:
            return await self._page.content()
        except PlaywrightError as e:
            raise NavigationFailure(f"Could not read rendered page: {e.message}") from e


class BrowserFetcher:
    """
    Owns the Playwright driver and a Chromium instance.
    Every `session()` gets its own BrowserContext, so navigation state is never
    shared between extractions.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 30,
        headless: bool = True,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "BrowserFetcher":
        try:
            self._playwright = await async_playwright().start()
        except PlaywrightError as e:
            raise ExtractionError(f"Failed to start Playwright: {e.message}") from e

        try:
            self._browser = await self._playwright.chromium.launch(headless=self._headless)
        except PlaywrightError as e:
            await self._playwright.stop()
            self._playwright = None
            raise ExtractionError(f"Failed to launch browser: {e.message}") from e

        logger.info("Browser fetcher initialized (headless=%s)", self._headless)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._browser:
                await self._browser.close()
                self._browser = None
        finally:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
        logger.info("Browser fetcher closed")

    def _require_browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("BrowserFetcher not started. Use: `async with BrowserFetcher() as f:`")
        return self._browser

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        browser = self._require_browser()

        try:
            # realistic viewport and user agent
            context = await browser.new_context(
                viewport={"width": 1920, "height": 1080},
                user_agent=USER_AGENT,
            )
        except PlaywrightError as e:
            raise ExtractionError(f"Failed to open browser session: {e.message}") from e

        try:
            try:
                page = await context.new_page()
            except PlaywrightError as e:
                raise ExtractionError(f"Failed to open browser tab: {e.message}") from e
            yield BrowserSession(page, timeout_seconds=self._timeout_seconds)
        finally:
            await context.close()
