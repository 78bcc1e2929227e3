"""
Atom feed parser.

Turns a raw feed body into a list of entry mappings and rejects bodies that
do not carry a feed with entries.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import feedparser

from release_aggregation.core.errors import FeedError, FeedErrorKind
from release_aggregation.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ParseResult:
    """Result of parsing one feed body."""

    success: bool
    feed_index: int
    entries: list = field(default_factory=list)
    error: Optional[FeedError] = None

    @property
    def entries_count(self) -> int:
        return len(self.entries)


def as_entry_list(value: Any) -> list:
    """Normalize an entry collection into a list.

    A lone entry mapping becomes a one-element list; ``None`` becomes an
    empty list.

    Args:
        value: Entry mapping, sequence of entries, or None

    Returns:
        List of entries
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    return list(value)


class FeedParser:
    """Parser for raw Atom feed bodies."""

    def parse(self, body: bytes, feed_index: int = 0) -> ParseResult:
        """Parse a feed body into entry mappings.

        Args:
            body: Raw feed document
            feed_index: Position of the feed in its batch, used in errors

        Returns:
            ParseResult with entries, or a structural error
        """
        parsed = feedparser.parse(body)

        if parsed.get("bozo") and parsed.get("bozo_exception") is not None:
            logger.debug(
                f"Feed {feed_index} is not well-formed: {parsed.get('bozo_exception')}"
            )

        return self.parse_document(parsed, feed_index)

    def parse_document(self, document: Mapping, feed_index: int = 0) -> ParseResult:
        """Validate a deserialized feed document and extract its entries.

        Args:
            document: Mapping with an Atom ``version`` and ``entries``
            feed_index: Position of the feed in its batch, used in errors

        Returns:
            ParseResult with entries, or a structural error
        """
        # feedparser normalizes RSS and RDF into the same shape; only an Atom
        # <feed> root reports an "atom*" version, even when the feed is bare
        is_atom = str(document.get("version") or "").startswith("atom")
        entries = as_entry_list(document.get("entries"))

        if not is_atom or not entries:
            error = FeedError(
                kind=FeedErrorKind.STRUCTURAL,
                feed_index=feed_index,
                message=f"Unexpected XML structure for feed at index {feed_index}",
            )
            logger.warning(str(error))
            return ParseResult(success=False, feed_index=feed_index, error=error)

        logger.debug(f"Parsed {len(entries)} entries from feed {feed_index}")
        return ParseResult(success=True, feed_index=feed_index, entries=entries)


def create_parser() -> FeedParser:
    """Create a FeedParser instance."""
    return FeedParser()
