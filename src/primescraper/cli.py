"""Command-line interface for primescraper."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
import uvicorn

from primescraper import __version__
from primescraper.config import load_config
from primescraper.errors import ExtractionError, FetchError, InvalidItemIdError
from primescraper.observability import configure_logging
from primescraper.scraper import Scraper

logger = structlog.get_logger(__name__)

EXIT_INVALID_ITEM_ID = 2
EXIT_FETCH_FAILED = 3
EXIT_NOT_FOUND = 4


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """primescraper - scrape movie data from Prime Video product pages."""
    ctx.ensure_object(dict)
    app_config = load_config(Path(config) if config else None)
    if log_level:
        app_config.monitoring.log_level = log_level
    configure_logging(app_config.monitoring)
    ctx.obj["config"] = app_config


@cli.command()
@click.argument("item_id")
@click.option("--timeout", type=float, default=None, help="Request deadline in seconds")
@click.pass_context
def scrape(ctx: click.Context, item_id: str, timeout: Optional[float]) -> None:
    """Scrape a single movie and print it as JSON."""
    scraper = Scraper(ctx.obj["config"].scraper)
    result = scraper.scrape(item_id, timeout=timeout)
    if result.ok:
        click.echo(json.dumps(result.movie.to_dict(), indent=2, ensure_ascii=False))
        return

    error = result.error
    click.echo(f"Error ({error.kind}): {error}", err=True)
    if isinstance(error, InvalidItemIdError):
        sys.exit(EXIT_INVALID_ITEM_ID)
    if isinstance(error, FetchError):
        sys.exit(EXIT_FETCH_FAILED)
    if isinstance(error, ExtractionError):
        sys.exit(EXIT_NOT_FOUND)
    sys.exit(1)


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Serve the scraper over HTTP."""
    from primescraper.web.main import create_app

    app_config = ctx.obj["config"]
    bind_host = host or app_config.web.host
    bind_port = port or app_config.web.port
    logger.info("Starting web service", host=bind_host, port=bind_port)

    uvicorn.run(
        create_app(Scraper(app_config.scraper)),
        host=bind_host,
        port=bind_port,
        log_config=None,
    )


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
