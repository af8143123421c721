"""
FastAPI application exposing the scraper over HTTP.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from primescraper import __version__
from primescraper.config import settings
from primescraper.observability import export_prometheus
from primescraper.scraper import Scraper

logger = structlog.get_logger(__name__)


def create_app(scraper: Optional[Scraper] = None) -> FastAPI:
    """Build the web application around ``scraper`` (default: from settings)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if getattr(app.state, "scraper", None) is None:
            app.state.scraper = Scraper(settings.scraper)
        logger.info("Web service started", version=__version__)
        yield
        logger.info("Web service stopped")

    app = FastAPI(title="primescraper", version=__version__, lifespan=lifespan)
    app.state.scraper = scraper

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "OK"

    @app.get("/metrics")
    def metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(export_prometheus(), media_type=CONTENT_TYPE_LATEST)

    # Sync endpoint: each request runs on its own worker thread.
    @app.get("/movie/amazon/{amazon_id}")
    def amazon_movie(amazon_id: str, request: Request) -> Any:
        result = request.app.state.scraper.scrape(amazon_id)
        if result.ok:
            return result.movie.to_dict()

        error = result.error
        logger.error("Error scraping the requested movie", item_id=amazon_id, error_kind=error.kind)
        return JSONResponse(
            status_code=error.http_status,
            content={"error": error.kind, "detail": str(error)},
        )

    return app


app = create_app()
