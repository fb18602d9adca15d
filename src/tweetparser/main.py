# src/tweetparser/main.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import click
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from tweetparser.config import Settings, load_settings
from tweetparser.errors import ExtractionError, NavigationFailure, TimeoutFailure
from tweetparser.extractors.base import ExtractionResult
from tweetparser.extractors.tweet import validate_url
from tweetparser.logging import setup_logging
from tweetparser.pipeline import build_extractor, build_fetcher
from tweetparser.render import render_console

logger = logging.getLogger(__name__)


async def extract_once(url: str, settings: Settings) -> ExtractionResult:
    # fresh browser per attempt, torn down on every exit path
    async with build_fetcher(settings) as fetcher:
        return await build_extractor(settings, fetcher).extract(url)


async def run(url: str, settings: Settings, *, retries: int = 0) -> ExtractionResult:
    """Extract one post; `retries` extra attempts on navigation/wait failures."""
    # a malformed URL fails here, before any browser is launched or retried
    url = validate_url(url)

    async for attempt in AsyncRetrying(
        reraise=True,
        stop=stop_after_attempt(retries + 1),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((NavigationFailure, TimeoutFailure)),
    ):
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                logger.warning("Retrying %s (attempt %d)", url, attempt.retry_state.attempt_number)
            return await extract_once(url, settings)
    raise AssertionError("unreachable")


@click.command()
@click.argument("url", required=False)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="TOML config file (browser/extraction sections are optional).")
@click.option("--headed/--headless", "headed", default=None,
              help="Show the browser window. Defaults to the config value.")
@click.option("--timeout", "wait_timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Seconds to wait for the post text to render.")
@click.option("--retries", type=click.IntRange(min=0), default=0, show_default=True,
              help="Extra attempts after a navigation or wait failure.")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(
    url: Optional[str],
    config_path: Optional[str],
    headed: Optional[bool],
    wait_timeout: Optional[float],
    retries: int,
    log_level: str,
) -> None:
    """Extract the text and media links of a post."""
    setup_logging(log_level)

    try:
        settings = load_settings(config_path, required=False)
        if headed is not None:
            settings.browser.headless = not headed
        if wait_timeout is not None:
            settings.browser.wait_timeout_seconds = wait_timeout

        if not url:
            url = click.prompt("Enter the tweet URL", prompt_suffix=": ")
        result = asyncio.run(run(url.strip(), settings, retries=retries))
    except ExtractionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(render_console(result))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
