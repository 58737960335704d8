"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults.

    Build a fresh instance per request so credential changes are picked up
    without restarting the process. Set LLM_READ_TIMEOUT_S=None to wait on
    upstream reads without a limit.
    """

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"

    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_MODEL: str = "claude-3-haiku-20240307"
    ANTHROPIC_API_URL: str = "https://api.anthropic.com/v1/messages"
    ANTHROPIC_VERSION: str = "2023-06-01"

    OLLAMA_API_KEY: str = ""
    OLLAMA_MODEL: str = "llama3.2:latest"
    OLLAMA_API_URL: str = "http://localhost:11434/v1/completions"

    HUGGINGFACE_API_KEY: str = ""
    HUGGINGFACE_MODEL: str = "mistralai/Mixtral-8x7B-Instruct-v0.1"
    HUGGINGFACE_API_URL: str = "https://router.huggingface.co/hf-inference/models"

    LLM_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    CHAT_MAX_TOKENS: int = Field(default=1024, ge=1)
    SCORECARD_MAX_TOKENS: int = Field(default=2048, ge=1)
    LLM_CONNECT_TIMEOUT_S: float = Field(default=10.0, gt=0.0)
    LLM_READ_TIMEOUT_S: Optional[float] = Field(default=120.0, gt=0.0)

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        validate_assignment=True,
        env_parse_none_str="None",
    )


def get_settings() -> Settings:
    """FastAPI dependency returning settings read from the current environment."""

    return Settings()
