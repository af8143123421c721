"""
Fetch-and-extract engine for a single Prime Video product page.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Sequence

import httpx
import structlog

from primescraper.config.config import ScraperConfig
from primescraper.crawler.http_client import PageFetcher
from primescraper.errors import InvalidItemIdError, ScrapeError
from primescraper.extractor.assembler import assemble
from primescraper.extractor.document import ParsedDocument
from primescraper.extractor.models import Movie, ScrapeResult
from primescraper.extractor.rules import DEFAULT_RULES, ExtractionRule
from primescraper.observability import increment

logger = structlog.get_logger(__name__)

ITEM_ID_PATTERN = re.compile(r"[A-Za-z0-9]+")


def validate_item_id(item_id: Any) -> str:
    """Return ``item_id`` if it is a non-empty alphanumeric string."""
    if not isinstance(item_id, str) or not ITEM_ID_PATTERN.fullmatch(item_id):
        raise InvalidItemIdError(f"Invalid item id: {item_id!r}", item_id=str(item_id))
    return item_id


class Scraper:
    """Scrapes one movie per call.

    The scraper holds only immutable configuration; each ``scrape`` call owns
    its page, parsed document and resulting ``Movie``, so one instance can
    serve concurrent callers.
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        *,
        fetcher: Optional[PageFetcher] = None,
        rules: Sequence[ExtractionRule] = DEFAULT_RULES,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or PageFetcher(self.config, transport=transport)
        self.rules = tuple(rules)

    def scrape(self, item_id: str, *, timeout: Optional[float] = None) -> ScrapeResult:
        """
        Scrape the product page of ``item_id``.

        Args:
            item_id: Alphanumeric item identifier
            timeout: Fetch deadline in seconds (None = use config default)

        Returns:
            ScrapeResult holding either the Movie or the classified error
        """
        log = logger.bind(item_id=item_id)
        try:
            movie = self._scrape(item_id, timeout)
        except ScrapeError as e:
            log.warning("Scrape failed", error_kind=e.kind, error=str(e))
            increment("scrapes_total", labels={"outcome": e.kind})
            return ScrapeResult(item_id=str(item_id), error=e)

        log.info("Scrape succeeded", fields=[name for name, value in movie.to_dict().items() if value])
        increment("scrapes_total", labels={"outcome": "ok"})
        return ScrapeResult(item_id=item_id, movie=movie)

    def _scrape(self, item_id: str, timeout: Optional[float]) -> Movie:
        validate_item_id(item_id)
        page = self.fetcher.fetch(item_id, timeout=timeout)
        document = ParsedDocument(page.body)
        values = self.extract(document)
        return assemble(values, item_id=item_id)

    def extract(self, document: ParsedDocument) -> Dict[str, Any]:
        """Run every rule against ``document``; absent fields map to None."""
        values: Dict[str, Any] = {}
        for rule in self.rules:
            value = rule.apply(document)
            values[rule.field] = value
            if value is not None:
                increment("fields_extracted_total", labels={"field": rule.field})
        return values
