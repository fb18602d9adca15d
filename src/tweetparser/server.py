# src/tweetparser/server.py
"""FastAPI service exposing the extraction pipeline as `GET /tweet_url`."""
from __future__ import annotations

import logging
import sys
from contextlib import AbstractAsyncContextManager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI, Query
from fastapi.responses import PlainTextResponse

from tweetparser.config import Settings, load_settings
from tweetparser.errors import ConfigurationFailure, ExtractionError
from tweetparser.extractors.tweet import validate_url
from tweetparser.logging import setup_logging
from tweetparser.pipeline import build_extractor, build_fetcher
from tweetparser.render import render_payload

logger = logging.getLogger(__name__)

FetcherFactory = Callable[[], AbstractAsyncContextManager]


def create_app(settings: Settings, fetcher_factory: Optional[FetcherFactory] = None) -> FastAPI:
    """Build the app. `fetcher_factory` returns a new browser per request."""
    make_fetcher = fetcher_factory or (lambda: build_fetcher(settings))
    app = FastAPI(title="tweetparser")

    @app.get("/tweet_url", response_class=PlainTextResponse)
    async def tweet_handler(tweet_url: str = Query(..., description="URL of the post to extract")) -> PlainTextResponse:
        try:
            # reject malformed URLs before a browser is launched
            url = validate_url(tweet_url)
            async with make_fetcher() as fetcher:
                result = await build_extractor(settings, fetcher).extract(url)
        except ExtractionError as e:
            logger.error("Extraction failed for %s: %s", tweet_url, e)
            return PlainTextResponse(f"Processing error: {e}", status_code=500)

        return PlainTextResponse(render_payload(result))

    return app


def main() -> None:
    setup_logging()
    try:
        settings = load_settings()
        server = settings.require_server()
    except ConfigurationFailure as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info("Server is running on %s...", server.bind_address)
    uvicorn.run(create_app(settings), host=server.host, port=server.port)


if __name__ == "__main__":
    main()
