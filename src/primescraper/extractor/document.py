"""
Read-only parsed view of a fetched product page.
"""

from __future__ import annotations

from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag


class ParsedDocument:
    """Queryable HTML tree built once per scrape.

    Only lookup methods are exposed; extraction rules never modify the tree.
    """

    parser = "html.parser"

    def __init__(self, markup: Union[str, bytes]) -> None:
        self._soup = BeautifulSoup(markup, self.parser)

    def select_one(self, selector: str) -> Optional[Tag]:
        """Return the first element matching a CSS selector, or None."""
        return self._soup.select_one(selector)

    def select(self, selector: str) -> List[Tag]:
        """Return all elements matching a CSS selector, in document order."""
        return list(self._soup.select(selector))
