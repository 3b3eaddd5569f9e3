"""Chat proxy API routes."""

import logging
import time

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from portfolio_chat.chat import service
from portfolio_chat.chat.schemas import ChatRequest, ChatResponse, ErrorResponse
from portfolio_chat.config import Settings, get_settings
from portfolio_chat.exceptions import (
    ConfigurationError,
    MessageRequiredError,
    MessageTooLongError,
    MethodNotAllowedError,
    UpstreamServiceError,
)
from portfolio_chat.logging_config import new_request_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

_UNSUPPORTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE"]


async def _read_message(request: Request) -> str:
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    return ChatRequest.model_validate(payload).message


@router.options("")
def preflight() -> Response:
    return Response(status_code=200)


@router.api_route("", methods=_UNSUPPORTED_METHODS, include_in_schema=False)
def method_not_allowed(request: Request):
    logger.warning(
        "Method not allowed",
        extra={"requestId": new_request_id(), "method": request.method},
    )
    raise MethodNotAllowedError()


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request, settings: Settings = Depends(get_settings)):
    request_id = new_request_id()
    logger.info("Chat request received", extra={"requestId": request_id})

    api_key = settings.minimax_api_key
    if not api_key:
        logger.error("MINIMAX_API_KEY not set", extra={"requestId": request_id})
        raise ConfigurationError("MINIMAX_API_KEY")

    try:
        message = await _read_message(request)
    except ValidationError:
        logger.warning("Invalid request: missing message", extra={"requestId": request_id})
        raise MessageRequiredError() from None

    # Raw length, before trimming
    if len(message) > settings.max_message_length:
        logger.warning(
            "Message too long",
            extra={"requestId": request_id, "length": len(message)},
        )
        raise MessageTooLongError(settings.max_message_length)

    message = message.strip()
    logger.info(
        "Processing message",
        extra={"requestId": request_id, "messageLength": len(message)},
    )

    start = time.monotonic()
    try:
        text = await service.complete(
            message,
            api_key,
            settings=settings,
            client=getattr(request.app.state, "http_client", None),
        )
    except Exception as exc:
        logger.error(
            "Request failed",
            extra={"requestId": request_id, "error": str(exc)},
            exc_info=True,
        )
        raise UpstreamServiceError(str(exc)) from exc

    duration = round((time.monotonic() - start) * 1000)
    logger.info(
        "Request completed successfully",
        extra={"requestId": request_id, "duration": duration},
    )
    return ChatResponse(response=text)
