"""
Release aggregation pipeline.

Fetches every feed, parses and extracts their entries, and merges the
releases into one list ordered by release ID, highest first.
"""

import time
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence

from release_aggregation.config import FEED_URLS
from release_aggregation.core.errors import FeedError
from release_aggregation.core.extractor import ReleaseExtractor, create_extractor
from release_aggregation.core.fetcher import FeedFetcher, FetchStats, create_fetcher
from release_aggregation.core.parser import FeedParser, create_parser
from release_aggregation.logger import get_logger
from release_aggregation.models.release import ReleaseEntry, ReleaseListResponse

logger = get_logger(__name__)


@dataclass
class AggregationResult:
    """Result of one aggregation run.

    A failed run carries no entries: results from feeds that did succeed
    are discarded.
    """

    success: bool
    entries: list[ReleaseEntry] = field(default_factory=list)
    error: Optional[FeedError] = None
    fetch_stats: Optional[FetchStats] = None
    elapsed_seconds: float = 0.0

    def __post_init__(self):
        """Validate aggregation result."""
        if self.success and self.error:
            raise ValueError("Successful aggregation cannot have an error")
        if not self.success and self.entries:
            raise ValueError("Failed aggregation cannot carry entries")

    def to_response(self) -> ReleaseListResponse:
        """Build the API response model for a successful run."""
        return ReleaseListResponse(entries=self.entries)


def merge_releases(batches: Iterable[list[ReleaseEntry]]) -> list[ReleaseEntry]:
    """Concatenate release batches and sort them by ID, highest first.

    Entries without an ID carry -1 and therefore end up last. The relative
    order of entries sharing an ID is not part of the contract.

    Args:
        batches: Release lists, one per feed

    Returns:
        Merged, sorted release list
    """
    merged = [entry for batch in batches for entry in batch]
    return sorted(merged, key=lambda entry: entry.id, reverse=True)


class ReleaseAggregator:
    """Runs fetch, parse, extract and merge over a fixed list of feeds."""

    def __init__(
        self,
        feed_urls: Sequence[str] = FEED_URLS,
        fetcher: Optional[FeedFetcher] = None,
        parser: Optional[FeedParser] = None,
        extractor: Optional[ReleaseExtractor] = None,
    ):
        """Initialize the aggregator.

        Args:
            feed_urls: Feeds to aggregate
            fetcher: Feed fetcher, created from config if omitted
            parser: Feed parser
            extractor: Release extractor
        """
        self.feed_urls = tuple(feed_urls)
        self.fetcher = fetcher or create_fetcher()
        self.parser = parser or create_parser()
        self.extractor = extractor or create_extractor()

    def aggregate(self) -> AggregationResult:
        """Aggregate releases from every feed.

        Any transport or structural failure fails the whole run.

        Returns:
            AggregationResult with sorted entries or the first error
        """
        start_time = time.time()

        fetch_results, stats = self.fetcher.fetch_all(self.feed_urls)

        for fetch_result in fetch_results:
            if not fetch_result.success:
                return self._failure(fetch_result.to_error(), stats, start_time)

        batches = []
        for fetch_result in fetch_results:
            parse_result = self.parser.parse(fetch_result.body, fetch_result.feed_index)
            if not parse_result.success:
                error = replace(parse_result.error, feed_url=fetch_result.feed_url)
                return self._failure(error, stats, start_time)
            batches.append(self.extractor.extract_all(parse_result.entries))

        entries = merge_releases(batches)
        elapsed = time.time() - start_time

        logger.info(
            f"Aggregated {len(entries)} releases from {len(self.feed_urls)} feeds "
            f"in {elapsed:.2f}s"
        )

        return AggregationResult(
            success=True,
            entries=entries,
            fetch_stats=stats,
            elapsed_seconds=elapsed,
        )

    def _failure(
        self, error: FeedError, stats: FetchStats, start_time: float
    ) -> AggregationResult:
        return AggregationResult(
            success=False,
            error=error,
            fetch_stats=stats,
            elapsed_seconds=time.time() - start_time,
        )


def create_aggregator(feed_urls: Sequence[str] = FEED_URLS) -> ReleaseAggregator:
    """Create a configured ReleaseAggregator instance.

    Args:
        feed_urls: Feeds to aggregate

    Returns:
        Configured ReleaseAggregator instance
    """
    return ReleaseAggregator(feed_urls=feed_urls)
