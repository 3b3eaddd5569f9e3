"""Application settings loaded from environment variables / .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env lives at project root (one level up from portfolio_chat/)
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Optional at load time so a missing key is reported per request, not at import
    minimax_api_key: str | None = None
    knowledge: str | None = None

    minimax_api_url: str = "https://api.minimax.io/v1/text/chatcompletion_v2"
    minimax_model: str = "MiniMax-Text-01"
    max_tokens: int = 500
    temperature: float = 0.7
    provider_timeout: float | None = None

    max_message_length: int = 1000

    cors_origins: list[str] = ["*"]
    static_dir: Path | None = None

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
