"""
Release field extraction from feed entries.

Each entry's HTML content is rendered as text and searched with one pattern
per field. A field whose pattern does not match falls back to its sentinel,
so every ReleaseEntry is fully populated.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from release_aggregation.core.html_text import html_to_text
from release_aggregation.logger import get_logger
from release_aggregation.models.release import NO_LINK, UNKNOWN, UNKNOWN_ID, ReleaseEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldPattern:
    """Pattern that recovers one release field from entry text."""

    field: str
    pattern: re.Pattern
    default: Any
    convert: Callable[[str], Any] = str

    def extract(self, text: str) -> "FieldMatch":
        """Search text for the first occurrence of the field.

        Args:
            text: Plain text of the entry

        Returns:
            FieldMatch with the converted value, or the default when absent
        """
        match = self.pattern.search(text)
        if match is None:
            return FieldMatch(self.field, self.default, found=False)
        try:
            return FieldMatch(self.field, self.convert(match.group(1)), found=True)
        except ValueError:
            return FieldMatch(self.field, self.default, found=False)


@dataclass(frozen=True)
class FieldMatch:
    """Extracted value for one field, or its sentinel."""

    field: str
    value: Any
    found: bool


RELEASE_FIELD_PATTERNS: tuple[FieldPattern, ...] = (
    FieldPattern("id", re.compile(r"ID:\s*(\d+)"), UNKNOWN_ID, int),
    FieldPattern("date", re.compile(r"Date:\s*([\d-]+)"), UNKNOWN),
    FieldPattern("version", re.compile(r"Version:\s*([\w.]+)"), UNKNOWN),
    FieldPattern("tag", re.compile(r"Tag:\s*(\w+)"), UNKNOWN),
    FieldPattern("name", re.compile(r"Name:\s*'([^']+)'"), UNKNOWN),
    FieldPattern("type", re.compile(r"Type:\s*'([^']+)'"), UNKNOWN),
    FieldPattern(
        "download_link", re.compile(r"Download Link:\s*'(https://[^']+)'"), NO_LINK
    ),
    # The repository link follows "GitHub" on the next wrapped line
    FieldPattern("github_link", re.compile(r"GitHub\n\[(https://[^\]]+)\]"), NO_LINK),
)


def entry_content(raw_entry: Mapping) -> str:
    """Get the HTML content of a raw feed entry.

    feedparser exposes Atom content as a list of content objects; plain
    mappings may carry the markup directly.

    Args:
        raw_entry: Raw entry mapping

    Returns:
        HTML content, or an empty string
    """
    content = raw_entry.get("content")
    if not content:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, Mapping):
        return content.get("value") or ""
    return "".join(part.get("value") or "" for part in content)


class ReleaseExtractor:
    """Builds ReleaseEntry records from raw feed entries."""

    def __init__(
        self,
        wordwrap: Optional[int] = None,
        patterns: tuple[FieldPattern, ...] = RELEASE_FIELD_PATTERNS,
    ):
        """Initialize the extractor.

        Args:
            wordwrap: Column width used when rendering entry HTML
            patterns: Field patterns to apply
        """
        self.wordwrap = wordwrap
        self.patterns = patterns

    def extract(self, raw_entry: Mapping) -> ReleaseEntry:
        """Extract a release from one raw entry.

        Args:
            raw_entry: Raw entry mapping from the feed parser

        Returns:
            Fully populated ReleaseEntry
        """
        text = html_to_text(entry_content(raw_entry), wordwrap=self.wordwrap)
        matches = self.match_fields(text)

        missing = [m.field for m in matches if not m.found]
        if missing:
            logger.debug(f"Entry {raw_entry.get('id', '?')} missing fields: {', '.join(missing)}")

        return ReleaseEntry(**{m.field: m.value for m in matches})

    def extract_all(self, raw_entries: list) -> list[ReleaseEntry]:
        """Extract releases from a list of raw entries."""
        return [self.extract(raw_entry) for raw_entry in raw_entries]

    def match_fields(self, text: str) -> list[FieldMatch]:
        """Apply every field pattern to entry text.

        Args:
            text: Plain text of the entry

        Returns:
            One FieldMatch per pattern
        """
        return [pattern.extract(text) for pattern in self.patterns]


def create_extractor(wordwrap: Optional[int] = None) -> ReleaseExtractor:
    """Create a configured ReleaseExtractor instance.

    Args:
        wordwrap: Column width used when rendering entry HTML

    Returns:
        Configured ReleaseExtractor instance
    """
    return ReleaseExtractor(wordwrap=wordwrap)
