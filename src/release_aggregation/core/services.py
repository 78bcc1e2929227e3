"""
Facade for release aggregation.

The web layer and scripts go through ReleaseService rather than the
pipeline classes.
"""

from typing import TYPE_CHECKING, Optional, Sequence

from release_aggregation.config import FEED_URLS
from release_aggregation.logger import get_logger

if TYPE_CHECKING:
    from release_aggregation.core.aggregator import AggregationResult, ReleaseAggregator


class ReleaseService:
    """Facade for fetching and merging release feeds."""

    def __init__(self, aggregator: Optional["ReleaseAggregator"] = None):
        """Initialize release service.

        Args:
            aggregator: Optional preconfigured aggregator
        """
        from release_aggregation.core.aggregator import create_aggregator

        self._aggregator = aggregator or create_aggregator()
        self._logger = get_logger(__name__)

    @property
    def feed_urls(self) -> Sequence[str]:
        """Feeds aggregated by this service."""
        return self._aggregator.feed_urls

    def get_releases(self) -> "AggregationResult":
        """Fetch every feed and return the merged releases.

        Returns:
            AggregationResult; on failure it carries the error and no entries
        """
        self._logger.debug(f"Aggregating releases from {len(self.feed_urls)} feeds")
        result = self._aggregator.aggregate()

        if not result.success:
            self._logger.error(f"Release aggregation failed: {result.error}")

        return result


def create_release_service(feed_urls: Sequence[str] = FEED_URLS) -> ReleaseService:
    """Create a ReleaseService for the given feeds.

    Args:
        feed_urls: Feeds to aggregate

    Returns:
        ReleaseService instance
    """
    from release_aggregation.core.aggregator import create_aggregator

    return ReleaseService(aggregator=create_aggregator(feed_urls))
