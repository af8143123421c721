"""
Page fetching for primescraper.

Exactly one product page is requested per scrape; there is no link
following, robots handling or request scheduling here.
"""

from .http_client import FetchedPage, PageFetcher

__all__ = ["FetchedPage", "PageFetcher"]
