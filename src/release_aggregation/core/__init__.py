"""Core release pipeline for release aggregation.

External code (web layer, scripts) should go through ReleaseService:

    from release_aggregation.core import ReleaseService

    service = ReleaseService()
    result = service.get_releases()

Pipeline classes (FeedFetcher, FeedParser, ReleaseExtractor,
ReleaseAggregator) live in their own modules and are imported from there.
"""

from release_aggregation.core.aggregator import AggregationResult, merge_releases
from release_aggregation.core.errors import FeedError, FeedErrorKind
from release_aggregation.core.fetcher import FetchResult, FetchStats
from release_aggregation.core.parser import ParseResult
from release_aggregation.core.services import ReleaseService, create_release_service

__all__ = [
    "ReleaseService",
    "create_release_service",
    # Result types
    "AggregationResult",
    "FetchResult",
    "FetchStats",
    "ParseResult",
    # Errors
    "FeedError",
    "FeedErrorKind",
    "merge_releases",
]


_internal_classes = {
    "FeedFetcher": "release_aggregation.core.fetcher",
    "FeedParser": "release_aggregation.core.parser",
    "ReleaseExtractor": "release_aggregation.core.extractor",
    "ReleaseAggregator": "release_aggregation.core.aggregator",
}


def __getattr__(name: str):
    """Point callers of pipeline classes at their modules."""
    if name in _internal_classes:
        raise ImportError(
            f"'{name}' is not exported from release_aggregation.core. "
            f"Use ReleaseService, or import it from {_internal_classes[name]}."
        )
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
