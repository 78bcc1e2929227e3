"""
Response helpers for the release API.

Success and error bodies keep the shape existing clients of the endpoint
depend on: ``{"entries": [...]}`` and ``{"err": true, "msg": ...}``.
"""

from typing import Iterable

from flask import jsonify

from release_aggregation.models.release import ReleaseEntry, ReleaseListResponse

FEED_FAILURE_MESSAGE = "Failed to fetch or parse one or more Atom feeds"


def release_to_dict(entry: ReleaseEntry) -> dict:
    """Convert a ReleaseEntry to its JSON representation.

    Args:
        entry: ReleaseEntry instance

    Returns:
        Dictionary with camelCase link keys
    """
    return entry.to_dict()


def releases_response(entries: Iterable[ReleaseEntry], status: int = 200) -> tuple:
    """Build the release list response.

    Args:
        entries: Releases in response order
        status: HTTP status code

    Returns:
        Flask response with JSON data
    """
    body = ReleaseListResponse(entries=list(entries)).to_dict()
    return jsonify(body), status


def error_response(message: str = FEED_FAILURE_MESSAGE, status: int = 500) -> tuple:
    """Build an error response.

    Args:
        message: Message shown to the caller
        status: HTTP status code

    Returns:
        Flask response with JSON data
    """
    return jsonify({"err": True, "msg": message}), status
