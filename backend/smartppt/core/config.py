import json
from enum import Enum
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SMART PPT"
    LOG_LEVEL: str = "INFO"

    # ── CORS ──────────────────────────────────────────────────
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["*"]

    # ── Model gateway (OpenAI-compatible chat completions) ───
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://ai.gateway.lovable.dev/v1"
    TEXT_MODEL: str = "google/gemini-2.5-flash"
    IMAGE_MODEL: str = "google/gemini-2.5-flash-image-preview"
    TEMPERATURE: float = 0.7
    MAX_OUTPUT_TOKENS: int = 2048

    # ── Deck image pipeline ───────────────────────────────────
    # 1 keeps per-slide image generation strictly sequential.
    IMAGE_CONCURRENCY: int = 1

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v: Any) -> Any:
        if isinstance(v, str):
            if v.startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("IMAGE_CONCURRENCY")
    @classmethod
    def at_least_one(cls, v: int) -> int:
        return max(1, v)


settings = Settings()
