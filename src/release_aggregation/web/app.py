"""
Flask application for the release aggregation API.
"""

from typing import Optional

from flask import Flask

from release_aggregation.config import get_config
from release_aggregation.core import ReleaseService
from release_aggregation.logger import get_logger
from release_aggregation.web.serializers import error_response

logger = get_logger(__name__)


def create_app(
    service: Optional[ReleaseService] = None,
    debug: bool = False,
) -> Flask:
    """Create and configure Flask application.

    Args:
        service: Release service backing the API, default feeds if omitted
        debug: Enable debug mode

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    config = get_config()
    app.config["DEBUG"] = debug or config.web.debug

    # Keep entry fields in declaration order
    app.json.sort_keys = False

    from release_aggregation.web.blueprints import ReleasesBlueprint

    releases_bp = ReleasesBlueprint(service=service).blueprint
    app.register_blueprint(releases_bp)

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.errorhandler(404)
    def not_found(e):
        """Handle 404 errors."""
        return error_response("Not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        """Handle 405 errors."""
        return error_response("Method not allowed", status=405)

    @app.errorhandler(500)
    def server_error(e):
        """Handle 500 errors."""
        logger.error(f"Server error: {e}")
        return error_response()

    logger.info("Web app created")

    return app
