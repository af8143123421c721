"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, cast

from primescraper.errors import ScrapeError


@dataclass(slots=True, frozen=True)
class Movie:
    """Structured fields scraped from one product page.

    Every field is independently optional; list fields keep document order.
    """

    title: Optional[str] = None
    release_year: Optional[str] = None
    poster: Optional[str] = None
    actors: List[str] = field(default_factory=list)
    similar_ids: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.title or self.release_year or self.poster or self.actors or self.similar_ids)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the public output field names."""
        return {
            "title": self.title or "",
            "release_year": self.release_year or "",
            "actors": list(self.actors),
            "poster": self.poster or "",
            "similar_ids": list(self.similar_ids),
        }


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of one scrape: either a movie or a classified error."""

    item_id: str
    movie: Optional[Movie] = None
    error: Optional[ScrapeError] = None

    def __post_init__(self) -> None:
        if (self.movie is None) == (self.error is None):
            raise ValueError("ScrapeResult needs exactly one of movie or error")

    @property
    def ok(self) -> bool:
        return self.movie is not None

    def unwrap(self) -> Movie:
        """Return the movie, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return cast(Movie, self.movie)
