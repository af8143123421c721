"""
primescraper - Prime Video product page scraper.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .errors import ExtractionError, FetchError, InvalidItemIdError, ScrapeError
from .extractor import Movie, ScrapeResult
from .scraper import Scraper

__all__ = [
    "__version__",
    "Config",
    "ExtractionError",
    "FetchError",
    "InvalidItemIdError",
    "Movie",
    "ScrapeError",
    "ScrapeResult",
    "Scraper",
]
