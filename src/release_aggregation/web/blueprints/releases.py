"""
Release API blueprint.

This module contains the release aggregation endpoint.
"""

from typing import Optional

from flask import Blueprint

from release_aggregation.core import ReleaseService
from release_aggregation.logger import get_logger
from release_aggregation.web.serializers import error_response, releases_response

logger = get_logger(__name__)


class ReleasesBlueprint:
    """Blueprint serving the merged release list."""

    def __init__(self, service: Optional[ReleaseService] = None, url_prefix: str = ""):
        """Initialize the releases blueprint.

        Args:
            service: Release service, created with default feeds if omitted
            url_prefix: URL prefix for all routes in this blueprint
        """
        self.service = service if service is not None else ReleaseService()
        self.blueprint = Blueprint("releases", __name__, url_prefix=url_prefix or None)
        self._register_routes()

    def _register_routes(self):
        """Register release routes on the blueprint."""
        self.blueprint.add_url_rule(
            "/get-releases", view_func=self._get_releases, methods=["GET"]
        )

    def _get_releases(self):
        """Return releases from every feed, highest ID first."""
        try:
            result = self.service.get_releases()
        except Exception as e:
            logger.exception(f"Unexpected error aggregating releases: {e}")
            return error_response()

        if not result.success:
            # Cause is logged by the service; callers only see the generic message
            return error_response()

        return releases_response(result.entries)
