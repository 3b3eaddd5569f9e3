"""Portfolio chat FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import Headers

from portfolio_chat.chat.router import router as chat_router
from portfolio_chat.config import Settings, get_settings
from portfolio_chat.exceptions import register_exception_handlers
from portfolio_chat.logging_config import configure_logging

logger = logging.getLogger(__name__)


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose preflight answers carry headers only, no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        # Always 200; the allow-list headers let the browser enforce CORS
        return Response(status_code=200, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle: opens the shared HTTP client."""
    settings = app.state.settings
    if not settings.minimax_api_key:
        logger.warning("MINIMAX_API_KEY is not set; chat requests will fail until it is")

    client = httpx.AsyncClient(timeout=settings.provider_timeout)
    app.state.http_client = client
    logger.info("HTTP client initialised for %s", settings.minimax_api_url)

    yield

    await client.aclose()
    logger.info("HTTP client closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; explicit ``settings`` replace the cached ones everywhere."""
    explicit = settings is not None
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Portfolio Chat",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if explicit:
        app.dependency_overrides[get_settings] = lambda: settings

    # CORS
    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Exception handlers
    register_exception_handlers(app, cors_origins=settings.cors_origins)

    # API routers
    app.include_router(chat_router)

    # Serve the portfolio site at root
    if settings.static_dir is not None:
        app.mount(
            "/",
            StaticFiles(directory=str(settings.static_dir), html=True),
            name="site",
        )

    return app


app = create_app()
