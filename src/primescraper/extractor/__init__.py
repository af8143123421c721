"""
Field extraction for Prime Video product pages.
"""

from .assembler import assemble
from .document import ParsedDocument
from .models import Movie, ScrapeResult
from .rules import DEFAULT_RULES, ExtractionRule

__all__ = [
    "assemble",
    "ParsedDocument",
    "Movie",
    "ScrapeResult",
    "DEFAULT_RULES",
    "ExtractionRule",
]
