"""
Error kinds for the release pipeline.

Failures travel through result records rather than exceptions, and are
mapped to an HTTP response once, at the web boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FeedErrorKind(str, Enum):
    """Kinds of failure that abort an aggregation."""

    TRANSPORT = "transport"  # network error, timeout or non-2xx status
    STRUCTURAL = "structural"  # body lacks the feed/entry structure


@dataclass(frozen=True)
class FeedError:
    """A failure attributed to one feed."""

    kind: FeedErrorKind
    feed_index: int
    message: str
    feed_url: Optional[str] = None

    def __str__(self) -> str:
        source = f"feed at index {self.feed_index}"
        if self.feed_url:
            source += f" ({self.feed_url})"
        return f"{self.kind.value} error for {source}: {self.message}"
