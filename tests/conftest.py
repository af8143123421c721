"""
Shared test configuration for primescraper.

The network is replaced with ``httpx.MockTransport`` everywhere; no test
performs a real request.
"""

from typing import Callable, List

import httpx
import pytest
import structlog

from primescraper.config import ScraperConfig
from primescraper.scraper import Scraper

BASE_URL = "https://www.amazon.de/gp/product/"

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True, scope="session")
def stdlib_logging():
    """Route structlog through stdlib logging so log lines never reach stdout."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


# ============================================================================
# HTML Fixtures
# ============================================================================

MOVIE_PAGE = """
<html>
  <head><title>Amazon.de: Movie X ansehen | Prime Video</title></head>
  <body>
    <div class="dv-fallback-packshot-image">
      <img src="https://m.media-amazon.com/images/url1.jpg"
           srcset="https://m.media-amazon.com/images/url1.jpg 1x, https://m.media-amazon.com/images/url2.jpg 2x">
    </div>
    <h1 data-automation-id="title">  Movie X  </h1>
    <span data-automation-id="release-year-badge">2019</span>
    <div data-automation-id="meta-info">
      <div>
        <dl><dt>Directors</dt><dd>Some Director</dd></dl>
        <dl><dt>Starring</dt><dd>A, B, C</dd></dl>
        <dl><dt>Genres</dt><dd>Drama</dd></dl>
      </div>
    </div>
    <div class="DVWebNode-detail-btf-wrapper">
      <ul>
        <li><a href="/gp/video/detail/B07ID00001/ref=atv_dp_amz_c_TS">One</a></li>
        <li><a href="/gp/video/detail/B07ID00002/ref=atv_dp_amz_c_TS">Two</a></li>
        <li><a href="/broken">Broken</a></li>
        <li><a href="/gp/video/detail/B07ID00003/ref=atv_dp_amz_c_TS">Three</a></li>
      </ul>
    </div>
  </body>
</html>
"""

TITLE_ONLY_PAGE = """
<html><body><h1 data-automation-id="title">Movie X</h1></body></html>
"""

UNRELATED_PAGE = """
<html>
  <head><title>Robot Check</title></head>
  <body>
    <h1>Enter the characters you see below</h1>
    <form action="/errors/validateCaptcha"><input name="field-keywords"></form>
  </body>
</html>
"""


@pytest.fixture
def movie_page() -> str:
    return MOVIE_PAGE


@pytest.fixture
def title_only_page() -> str:
    return TITLE_ONLY_PAGE


@pytest.fixture
def unrelated_page() -> str:
    return UNRELATED_PAGE


# ============================================================================
# Network Fixtures
# ============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Build a transport answering every request with ``status`` and ``html``."""

    def _make(html: str = "", status: int = 200) -> RecordingTransport:
        return RecordingTransport(
            lambda request: httpx.Response(status, text=html, headers={"Content-Type": "text/html"})
        )

    return _make


@pytest.fixture
def scraper_config() -> ScraperConfig:
    return ScraperConfig(url_template=BASE_URL, timeout=5.0)


@pytest.fixture
def make_scraper(scraper_config, make_transport):
    """Build a Scraper backed by a recording transport; returns (scraper, transport)."""

    def _make(html: str = "", status: int = 200, **config_overrides):
        config = scraper_config.model_copy(update=config_overrides)
        transport = make_transport(html, status)
        return Scraper(config, transport=transport), transport

    return _make
