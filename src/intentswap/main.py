"""Main entry point - runs the API server."""

import logging

import uvicorn

from intentswap.api.app import create_app
from intentswap.config import get_settings

logger = logging.getLogger(__name__)

QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting IntentSwap...")
    logger.info(f"Environment: {settings.environment}")
    if settings.dry_run:
        logger.warning("DRY_RUN enabled - deposits are simulated")
    if settings.has_service_account:
        logger.info(f"Service NEAR account: {settings.sender_near_account}")

    app = create_app()
    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    try:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level="debug" if settings.debug else "info",
        )
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    main()
