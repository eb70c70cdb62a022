"""Startup script for the virtual timeline API."""

import logging
import sys

from virtualtimeline.web.app import run_dev_server


def main() -> None:
    """Run the development server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger = logging.getLogger(__name__)

    logger.info("Virtual Timeline")
    logger.info("=" * 50)
    logger.info("POST /api/timeline/layout    scrubber tracks and hidden markers")
    logger.info("POST /api/timeline/resolve   snap a playhead, report progress")
    logger.info("POST /api/timeline/seek      scrubber click to real time")
    logger.info("POST /api/timeline/navigate  next/previous cut point")
    logger.info("API docs at: http://127.0.0.1:8000/docs")
    logger.info("=" * 50)

    try:
        run_dev_server(host="127.0.0.1", port=8000)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except (OSError, RuntimeError, ImportError) as e:
        logger.exception("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
