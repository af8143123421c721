"""
Failure taxonomy for a single scrape invocation.

Every failure is scoped to one call of ``Scraper.scrape``. Missing individual
fields are never errors; they simply stay absent in the returned ``Movie``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FetchFailure(str, Enum):
    """Why the page could not be retrieved."""

    NETWORK_FAILURE = "network_failure"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"


class ExtractionFailure(str, Enum):
    NOT_FOUND = "not_found"


class ScrapeError(Exception):
    """Base class for classified scrape failures."""

    kind: str = "scrape_error"
    http_status: int = 500

    def __init__(self, message: str, *, item_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class InvalidItemIdError(ScrapeError, ValueError):
    """Raised when an item identifier is not alphanumeric."""

    kind = "invalid_item_id"
    http_status = 400


class FetchError(ScrapeError):
    """The page could not be retrieved; extraction is never attempted."""

    def __init__(
        self,
        kind: FetchFailure,
        message: str,
        *,
        item_id: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, item_id=item_id)
        self.failure = kind
        self.url = url
        self.status_code = status_code

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.failure.value

    @property
    def http_status(self) -> int:  # type: ignore[override]
        if self.failure is FetchFailure.TIMEOUT:
            return 504
        return 502


class ExtractionError(ScrapeError):
    """The page was fetched but none of the expected fields were present."""

    http_status = 404

    def __init__(
        self,
        message: str = "No movie data found on page",
        *,
        item_id: Optional[str] = None,
        kind: ExtractionFailure = ExtractionFailure.NOT_FOUND,
    ) -> None:
        super().__init__(message, item_id=item_id)
        self.failure = kind

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.failure.value
