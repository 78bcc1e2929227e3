"""
Run the release aggregation server.

Usage:
    python -m release_aggregation [--host HOST] [--port PORT] [--debug]
"""

import argparse
from typing import Optional, Sequence

from release_aggregation.config import get_config
from release_aggregation.logger import get_logger, setup_logger

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    config = get_config()

    parser = argparse.ArgumentParser(description="Serve merged release feeds over HTTP")
    parser.add_argument("--host", default=config.web.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=config.web.port, help="Port to listen on")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Start the web server."""
    args = build_arg_parser().parse_args(argv)

    setup_logger()

    from release_aggregation.web import create_app

    app = create_app(debug=args.debug)

    logger.info(f"Server is running on http://{args.host}:{args.port}/get-releases")
    app.run(host=args.host, port=args.port, debug=args.debug, use_reloader=False)


if __name__ == "__main__":
    main()
