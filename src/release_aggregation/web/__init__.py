"""Web layer for release aggregation."""

from release_aggregation.web.app import create_app

__all__ = ["create_app"]
