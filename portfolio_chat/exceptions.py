"""Custom exception hierarchy and global error handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_chat.logging_config import new_request_id

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception, rendered as ``{"error": ..., "details": ...}``."""

    def __init__(
        self,
        detail: str,
        status_code: int = 500,
        details: str | None = None,
    ):
        self.detail = detail
        self.status_code = status_code
        self.details = details
        super().__init__(detail)

    def to_content(self) -> dict[str, str]:
        content = {"error": self.detail}
        if self.details is not None:
            content["details"] = self.details
        return content


class MethodNotAllowedError(AppException):
    def __init__(self, detail: str = "Method not allowed"):
        super().__init__(detail=detail, status_code=405)


class MessageRequiredError(AppException):
    def __init__(self, detail: str = "Message is required"):
        super().__init__(detail=detail, status_code=400)


class MessageTooLongError(AppException):
    def __init__(self, max_length: int = 1000):
        super().__init__(
            detail=f"Message too long (max {max_length} characters)",
            status_code=400,
        )


class ConfigurationError(AppException):
    def __init__(self, setting: str = "MINIMAX_API_KEY"):
        super().__init__(
            detail=f"Server configuration error: {setting} is not set",
            status_code=500,
        )


class UpstreamServiceError(AppException):
    def __init__(self, details: str, detail: str = "Failed to get AI response"):
        super().__init__(detail=detail, status_code=500, details=details)


def _cors_headers(request: Request, cors_origins: list[str]) -> dict[str, str]:
    origin = request.headers.get("origin")
    if origin is None:
        return {}
    if "*" in cors_origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin in cors_origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def register_exception_handlers(app: FastAPI, cors_origins: list[str] | None = None) -> None:
    """Register global exception handlers on the FastAPI app."""
    cors_origins = cors_origins or []

    @app.exception_handler(AppException)
    def handle_app_exception(_request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Methods without a route of their own, and non-GET requests to the static site
        if exc.status_code == 405:
            logger.warning(
                "Method not allowed",
                extra={"requestId": new_request_id(), "method": request.method},
            )
            error = MethodNotAllowedError()
            return JSONResponse(status_code=error.status_code, content=error.to_content())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Runs outside the CORS middleware, so the header is added here
    @app.exception_handler(Exception)
    def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc)},
            headers=_cors_headers(request, cors_origins),
        )
