"""Chat completion client: forwards a visitor's message to the MiniMax API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from portfolio_chat.chat.prompts import build_system_prompt
from portfolio_chat.chat.schemas import (
    CompletionMessage,
    CompletionRequest,
    CompletionResponse,
)
from portfolio_chat.config import Settings, get_settings

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base error for a failed completion call."""


class ProviderHTTPError(ProviderError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"MiniMax API error {status_code}: {body}")


class ProviderSoftError(ProviderError):
    """A 2xx answer whose ``base_resp.status_code`` is non-zero (e.g. 1008, insufficient balance)."""

    def __init__(self, status_code: int, status_msg: str | None):
        self.status_code = status_code
        self.status_msg = status_msg
        super().__init__(f"MiniMax error {status_code}: {status_msg}")


class EmptyCompletionError(ProviderError):
    def __init__(self):
        super().__init__("Empty response from MiniMax API")


def build_completion_request(message: str, settings: Settings) -> CompletionRequest:
    return CompletionRequest(
        model=settings.minimax_model,
        messages=[
            CompletionMessage(role="system", content=build_system_prompt(settings.knowledge)),
            CompletionMessage(role="user", content=message),
        ],
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )


def _decode_body(response: httpx.Response) -> Any:
    """Return the parsed JSON body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _dump_body(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


async def _post(
    client: httpx.AsyncClient, url: str, api_key: str, payload: dict[str, Any]
) -> httpx.Response:
    try:
        return await client.post(
            url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
        )
    except httpx.HTTPError as exc:
        logger.error("MiniMax API unreachable", extra={"error": str(exc) or type(exc).__name__})
        raise ProviderError(f"MiniMax API request failed: {str(exc) or type(exc).__name__}") from exc


async def complete(
    message: str,
    api_key: str,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Send ``message`` with the system prompt and return the assistant's text.

    Raises a ``ProviderError`` subclass when the endpoint fails, reports a
    soft error, or returns no content. ``client`` is reused when given;
    otherwise a client is opened for this call only.
    """
    settings = settings or get_settings()
    logger.info("Calling MiniMax API", extra={"messageLength": len(message)})

    request_body = build_completion_request(message, settings)
    logger.debug(
        "Request body",
        extra={"model": request_body.model, "max_tokens": request_body.max_tokens},
    )

    # Stray newlines in the key break the Authorization header
    clean_key = api_key.strip()
    payload = request_body.model_dump()

    if client is None:
        async with httpx.AsyncClient(timeout=settings.provider_timeout) as own_client:
            response = await _post(own_client, settings.minimax_api_url, clean_key, payload)
    else:
        response = await _post(client, settings.minimax_api_url, clean_key, payload)

    logger.info(
        "MiniMax API response received",
        extra={"status": response.status_code, "statusText": response.reason_phrase},
    )

    data = _decode_body(response)

    if not response.is_success:
        logger.error("MiniMax API error", extra={"status": response.status_code, "data": data})
        raise ProviderHTTPError(response.status_code, _dump_body(data))

    if not isinstance(data, dict):
        logger.error("Malformed MiniMax response", extra={"data": data})
        raise ProviderError(f"Malformed response from MiniMax API: {_dump_body(data)}")

    try:
        completion = CompletionResponse.model_validate(data)
    except ValidationError as exc:
        logger.error("Malformed MiniMax response", extra={"data": data})
        raise ProviderError(f"Malformed response from MiniMax API: {exc}") from exc

    logger.debug(
        "MiniMax response data",
        extra={
            "finishReason": completion.finish_reason,
            "totalTokens": completion.usage.total_tokens if completion.usage else None,
        },
    )

    base_resp = completion.base_resp
    if base_resp is not None and base_resp.status_code:
        logger.error(
            "MiniMax base_resp error",
            extra={"status_code": base_resp.status_code, "status_msg": base_resp.status_msg},
        )
        raise ProviderSoftError(base_resp.status_code, base_resp.status_msg)

    content = completion.content
    if not content:
        logger.error("Empty content in MiniMax response", extra={"data": data})
        raise EmptyCompletionError()

    logger.info("MiniMax API call successful", extra={"responseLength": len(content)})
    return content
