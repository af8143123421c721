"""
Single-page HTTP fetcher for product pages.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import httpx
import structlog

from primescraper.config.config import ScraperConfig
from primescraper.errors import FetchError, FetchFailure
from primescraper.observability import histogram

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FetchedPage:
    """Raw response of one product page request."""

    status: int
    headers: Dict[str, str]
    body: bytes
    start_ts: float
    end_ts: float
    attempts: int
    url: str
    final_url: str

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class PageFetcher:
    """Fetches one product page per call with a bounded deadline.

    A fresh ``httpx.Client`` is opened for every fetch and closed before the
    call returns, so nothing is shared between invocations and a timed-out
    request never keeps its connection open.
    """

    def __init__(self, config: ScraperConfig, *, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.config = config
        self._transport = transport

    def build_url(self, item_id: str) -> str:
        """Return the product page URL for ``item_id``."""
        template = self.config.url_template
        if "{item_id}" in template:
            return template.format(item_id=item_id)
        return template + item_id

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": self.config.accept_language,
        }

    def fetch(self, item_id: str, *, timeout: Optional[float] = None) -> FetchedPage:
        """
        Fetch the product page for ``item_id``.

        ``timeout`` is one deadline for the whole call. Connecting, reading
        the streamed body and an optional retry all draw from the same budget.

        Args:
            item_id: A validated item identifier
            timeout: Deadline in seconds (None = use config default)

        Returns:
            FetchedPage for a 2xx response

        Raises:
            FetchError: on timeout, transport failure or a non-2xx status
        """
        url = self.build_url(item_id)
        budget = timeout if timeout is not None else self.config.timeout
        deadline = time.monotonic() + budget
        max_attempts = 2 if self.config.retry_network_failure else 1
        start_time = time.time()
        attempt = 0

        while True:
            attempt += 1
            if deadline - time.monotonic() <= 0:
                logger.warning("Deadline exhausted before request", url=url, attempt=attempt, timeout=budget)
                raise self._timeout_error(item_id, url, budget)
            logger.info("Visiting page", url=url, attempt=attempt)
            try:
                response, body = self._get(url, deadline)
                break
            except httpx.TimeoutException as e:
                logger.warning("Request timed out", url=url, timeout=budget, error=str(e))
                raise self._timeout_error(item_id, url, budget) from e
            except httpx.TransportError as e:
                logger.warning("Request failed", url=url, attempt=attempt, error=str(e))
                if attempt < max_attempts:
                    continue
                raise FetchError(
                    FetchFailure.NETWORK_FAILURE,
                    f"Request to {url} failed: {e}",
                    item_id=item_id,
                    url=url,
                ) from e
            except httpx.RequestError as e:
                # Redirect loops, undecodable bodies. Never retried.
                logger.warning("Request failed", url=url, attempt=attempt, error=str(e))
                raise FetchError(
                    FetchFailure.NETWORK_FAILURE,
                    f"Request to {url} failed: {e}",
                    item_id=item_id,
                    url=url,
                ) from e
            finally:
                histogram("fetch_latency_seconds", time.time() - start_time)

        end_time = time.time()

        if not response.is_success:
            logger.error("Failed response", url=url, status=response.status_code)
            raise FetchError(
                FetchFailure.HTTP_STATUS,
                f"Request to {url} returned HTTP {response.status_code}",
                item_id=item_id,
                url=url,
                status_code=response.status_code,
            )

        logger.info("Successful response", url=url, status=response.status_code, attempts=attempt)
        return FetchedPage(
            status=response.status_code,
            headers=dict(response.headers),
            body=body,
            start_ts=start_time,
            end_ts=end_time,
            attempts=attempt,
            url=url,
            final_url=str(response.url),
        )

    @staticmethod
    def _timeout_error(item_id: str, url: str, budget: float) -> FetchError:
        return FetchError(
            FetchFailure.TIMEOUT,
            f"Request to {url} timed out after {budget}s",
            item_id=item_id,
            url=url,
        )

    def _get(self, url: str, deadline: float) -> Tuple[httpx.Response, bytes]:
        """Stream one GET on a client scoped to this call, bounded by ``deadline``.

        Socket timeouts are set to the time left, and the deadline is checked
        again after every body chunk so a slow trickle cannot outlive it.
        Non-2xx bodies are not read.
        """
        with httpx.Client(
            transport=self._transport,
            timeout=httpx.Timeout(max(deadline - time.monotonic(), 0.0)),
            headers=self._headers(),
            follow_redirects=True,
        ) as client:
            with client.stream("GET", url) as response:
                if not response.is_success:
                    return response, b""
                chunks: List[bytes] = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.monotonic() >= deadline:
                        raise httpx.ReadTimeout("Deadline exceeded while reading body", request=response.request)
                return response, b"".join(chunks)
