from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from tweetparser.errors import ExtractionError, NavigationFailure, TimeoutFailure
from tweetparser.fetchers.browser import BrowserFetcher, BrowserSession


def _page(**overrides):
    page = SimpleNamespace(
        goto=AsyncMock(return_value=SimpleNamespace(status=200)),
        wait_for_selector=AsyncMock(return_value=None),
        content=AsyncMock(return_value="<html></html>"),
    )
    for name, value in overrides.items():
        setattr(page, name, value)
    return page


async def test_navigate_uses_millisecond_timeout():
    page = _page()
    await BrowserSession(page, timeout_seconds=12).navigate("https://x.com/a/status/1")

    page.goto.assert_awaited_once_with(
        "https://x.com/a/status/1", timeout=12000, wait_until="domcontentloaded"
    )


@pytest.mark.parametrize(
    "goto",
    [
        AsyncMock(side_effect=PlaywrightError("net::ERR_NAME_NOT_RESOLVED")),
        AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 30000ms exceeded")),
        AsyncMock(return_value=SimpleNamespace(status=404)),
    ],
)
async def test_navigate_failures(goto):
    with pytest.raises(NavigationFailure):
        await BrowserSession(_page(goto=goto)).navigate("https://x.com/a/status/1")


async def test_navigate_accepts_missing_response():
    page = _page(goto=AsyncMock(return_value=None))
    await BrowserSession(page).navigate("https://x.com/a/status/1#top")


async def test_wait_timeout_becomes_timeout_failure():
    page = _page(wait_for_selector=AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 1000ms exceeded")))

    with pytest.raises(TimeoutFailure) as excinfo:
        await BrowserSession(page).wait_for_selector("div.x", 1)

    assert "div.x" in str(excinfo.value)
    page.wait_for_selector.assert_awaited_once_with("div.x", state="attached", timeout=1000)


async def test_wait_crash_becomes_navigation_failure():
    page = _page(wait_for_selector=AsyncMock(side_effect=PlaywrightError("Target closed")))

    with pytest.raises(NavigationFailure):
        await BrowserSession(page).wait_for_selector("div.x", 1)


async def test_rendered_html():
    assert await BrowserSession(_page()).rendered_html() == "<html></html>"


async def test_session_requires_started_fetcher():
    fetcher = BrowserFetcher()

    with pytest.raises(RuntimeError):
        async with fetcher.session():
            pass


async def test_session_closes_context_on_error():
    context = SimpleNamespace(new_page=AsyncMock(return_value=_page()), close=AsyncMock())
    fetcher = BrowserFetcher(timeout_seconds=3)
    fetcher._browser = SimpleNamespace(new_context=AsyncMock(return_value=context))

    with pytest.raises(TimeoutFailure):
        async with fetcher.session() as session:
            assert isinstance(session, BrowserSession)
            raise TimeoutFailure("never rendered")

    context.close.assert_awaited_once()


async def test_new_context_failure_becomes_extraction_error():
    fetcher = BrowserFetcher()
    fetcher._browser = SimpleNamespace(
        new_context=AsyncMock(side_effect=PlaywrightError("Browser has been closed"))
    )

    with pytest.raises(ExtractionError, match="Browser has been closed"):
        async with fetcher.session():
            pass


async def test_new_page_failure_becomes_extraction_error_and_closes_context():
    context = SimpleNamespace(
        new_page=AsyncMock(side_effect=PlaywrightError("Target page, context or browser has been closed")),
        close=AsyncMock(),
    )
    fetcher = BrowserFetcher()
    fetcher._browser = SimpleNamespace(new_context=AsyncMock(return_value=context))

    with pytest.raises(ExtractionError):
        async with fetcher.session():
            pass

    context.close.assert_awaited_once()


async def test_driver_start_failure_becomes_extraction_error(monkeypatch):
    driver = SimpleNamespace(start=AsyncMock(side_effect=PlaywrightError("Driver not found")))
    monkeypatch.setattr("tweetparser.fetchers.browser.async_playwright", lambda: driver)

    with pytest.raises(ExtractionError, match="Failed to start Playwright"):
        async with BrowserFetcher():
            pass
