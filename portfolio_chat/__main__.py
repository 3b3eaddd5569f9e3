"""Local development server: ``python -m portfolio_chat``."""

import logging

import uvicorn

from portfolio_chat.config import get_settings
from portfolio_chat.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main():
    """Run the FastAPI application with uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)

    base = f"http://localhost:{settings.port}"
    logger.info("Dev server running at %s", base)
    logger.info("Chat API at %s/api/chat", base)
    logger.info(
        "MINIMAX_API_KEY: %s",
        "set" if settings.minimax_api_key else "NOT SET, add it to .env",
    )

    uvicorn.run(
        "portfolio_chat.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
