"""
Field extraction rules for Prime Video product pages.

Each rule is a pure mapping from a ``ParsedDocument`` to one optional field
value. Rules are independent: all of them run against the same document and
a miss in one never affects another. A selector that matches nothing, or an
element missing the expected attribute, yields ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

import structlog
from bs4 import Tag

from .document import ParsedDocument

logger = structlog.get_logger(__name__)

# Page template offsets. The cast list is the description of the second
# definition list in the meta-info block, and related item links look like
# /gp/video/detail/<ID>/ref=...
ACTORS_DEFINITION_LIST = 2
SIMILAR_ID_SEGMENT = 4

TITLE_SELECTOR = 'h1[data-automation-id="title"]'
RELEASE_YEAR_SELECTOR = 'span[data-automation-id="release-year-badge"]'
POSTER_SELECTOR = "div.dv-fallback-packshot-image img"
ACTORS_SELECTOR = f'div[data-automation-id="meta-info"] dl:nth-of-type({ACTORS_DEFINITION_LIST}) dd'
SIMILAR_SELECTOR = "div.DVWebNode-detail-btf-wrapper ul li a"

_RULE_ERRORS = (AttributeError, IndexError, KeyError, TypeError, ValueError)


def text_content(element: Tag) -> Optional[str]:
    """Trimmed text of an element."""
    text = element.get_text().strip()
    return text or None


def first_srcset_url(element: Tag) -> Optional[str]:
    """URL of the first candidate in an ``img`` srcset, without its descriptor."""
    srcset = element.get("srcset")
    if not srcset or not isinstance(srcset, str):
        return None
    candidate = srcset.split(",")[0].strip()
    if not candidate:
        return None
    return candidate.split()[0]


def split_names(element: Tag) -> List[str]:
    return [name.strip() for name in element.get_text().split(",") if name.strip()]


def related_item_ids(elements: Sequence[Tag]) -> List[str]:
    """Item ids taken from related-item link paths, in document order.

    Links whose path is too short to carry an id are skipped.
    """
    ids: List[str] = []
    for anchor in elements:
        href = anchor.get("href")
        if not href or not isinstance(href, str):
            continue
        segments = href.split("/")
        if len(segments) <= SIMILAR_ID_SEGMENT:
            logger.debug("Skipping malformed related item link", href=href)
            continue
        item_id = segments[SIMILAR_ID_SEGMENT]
        if item_id:
            ids.append(item_id)
    return ids


@dataclass(frozen=True)
class ExtractionRule:
    """Maps the first (or, with ``many``, every) match of ``selector`` to a value."""

    field: str
    selector: str
    transform: Callable[[Any], Any]
    many: bool = False

    def apply(self, document: ParsedDocument) -> Any:
        """Return the extracted value, or None when the field is absent."""
        try:
            if self.many:
                value = self.transform(document.select(self.selector))
            else:
                element = document.select_one(self.selector)
                if element is None:
                    logger.debug("Selector matched nothing", field=self.field, selector=self.selector)
                    return None
                value = self.transform(element)
        except _RULE_ERRORS as e:
            logger.debug("Extraction rule failed", field=self.field, error=str(e))
            return None
        return value or None


DEFAULT_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("title", TITLE_SELECTOR, text_content),
    ExtractionRule("release_year", RELEASE_YEAR_SELECTOR, text_content),
    ExtractionRule("poster", POSTER_SELECTOR, first_srcset_url),
    ExtractionRule("actors", ACTORS_SELECTOR, split_names),
    ExtractionRule("similar_ids", SIMILAR_SELECTOR, related_item_ids, many=True),
)
