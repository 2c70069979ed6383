"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AliasChoices, AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="PartSelect Parts Assistant", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")

    sqlite_path: Path = Field(
        default=Path("db/conversations.db"),
        description="Conversation DB path. Also holds handoff tickets.",
    )
    history_window: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of prior turns used as conversational context.",
    )

    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("llm_api_key", "deepseek_api_key"),
        description="Optional chat completions API key. Responses are simulated when omitted.",
    )
    llm_api_url: str = Field(
        default="https://api.deepseek.com/v1/chat/completions",
        description="OpenAI-compatible chat completions endpoint.",
    )
    llm_model: str = Field(default="deepseek-chat", description="Chat completions model identifier.")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature.")
    llm_max_tokens: int = Field(default=1000, ge=1, description="Maximum tokens per completion.")
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single completion request.",
    )

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed frontend origin (CORS). If omitted, defaults to localhost dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins for multi-client deployments.",
    )

    host: str = Field(default="0.0.0.0", description="Bind address for the bundled launcher.")
    port: int = Field(default=8000, description="Bind port for the bundled launcher.")

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []

        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend([
                "http://localhost:5000",
                "http://127.0.0.1:5000",
            ])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        # Deduplicate while preserving order
        seen: set[str] = set()
        unique: list[str] = []
        for origin in origins:
            if origin not in seen:
                seen.add(origin)
                unique.append(origin)

        return unique

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
