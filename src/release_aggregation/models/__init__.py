"""Data models for release aggregation."""

from release_aggregation.models.release import (
    NO_LINK,
    UNKNOWN,
    UNKNOWN_ID,
    ReleaseEntry,
    ReleaseListResponse,
)

__all__ = [
    "ReleaseEntry",
    "ReleaseListResponse",
    "UNKNOWN_ID",
    "UNKNOWN",
    "NO_LINK",
]
