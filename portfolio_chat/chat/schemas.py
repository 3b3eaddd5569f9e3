"""Pydantic models for the chat API and the MiniMax completion payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class ChatRequest(BaseModel):
    """Request body for sending a chat message."""

    message: StrictStr

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatResponse(BaseModel):
    """Successful reply from the assistant."""

    response: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class CompletionMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class CompletionRequest(BaseModel):
    """Body posted to the chat-completion endpoint."""

    model: str
    messages: list[CompletionMessage]
    max_tokens: int
    temperature: float


# Provider response. Every field is optional; missing pieces are checked by the client.
# Diagnostic-only fields (finish_reason, total_tokens) are untyped.


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CompletionChoiceMessage(_ProviderModel):
    content: str | None = None


class CompletionChoice(_ProviderModel):
    message: CompletionChoiceMessage | None = None
    finish_reason: Any = None


class CompletionUsage(_ProviderModel):
    total_tokens: Any = None


class BaseResp(_ProviderModel):
    status_code: int | None = None
    status_msg: str | None = None


class CompletionResponse(_ProviderModel):
    choices: list[CompletionChoice] | None = None
    usage: CompletionUsage | None = None
    base_resp: BaseResp | None = None

    @property
    def content(self) -> str | None:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content

    @property
    def finish_reason(self) -> str | None:
        return self.choices[0].finish_reason if self.choices else None
