"""
Builds the final ``Movie`` from per-field rule outputs.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from primescraper.errors import ExtractionError

from .models import Movie


def assemble(values: Mapping[str, Any], *, item_id: Optional[str] = None) -> Movie:
    """Merge extracted field values into a ``Movie``.

    Absent fields stay empty. When nothing at all was extracted the page is
    treated as not being a movie page.

    Raises:
        ExtractionError: if every field is absent
    """
    movie = Movie(
        title=values.get("title") or None,
        release_year=values.get("release_year") or None,
        poster=values.get("poster") or None,
        actors=list(values.get("actors") or []),
        similar_ids=list(values.get("similar_ids") or []),
    )
    if movie.is_empty():
        raise ExtractionError(item_id=item_id)
    return movie
