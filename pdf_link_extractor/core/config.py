from __future__ import annotations

from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None  # Rotating file log, only honoured in local environments

    # === Title lookup service ===
    TITLE_LOOKUP_URL: str = "https://get-title-from-url.vercel.app/api/get-title-from-url"
    TITLE_LOOKUP_TIMEOUT: float = Field(
        default=5.0,
        gt=0.0,
        description="Transport timeout for one title lookup in seconds (httpx default).",
    )

    # === Upload ===
    MAX_UPLOAD_SIZE_MB: int = 200

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept stdlib level names in any case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a stdlib level name, got {v!r}")
        return level

    @field_validator("TITLE_LOOKUP_URL")
    @classmethod
    def validate_title_lookup_url(cls, v: str) -> str:
        """The lookup endpoint must be an absolute http(s) URL."""
        parsed = urlparse(v.strip())
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("TITLE_LOOKUP_URL must be an absolute http(s) URL")
        return v.strip()

    @field_validator("MAX_UPLOAD_SIZE_MB")
    @classmethod
    def validate_max_upload_size(cls, v: int) -> int:
        """Validate the upload ceiling handed to Streamlit's file uploader."""
        if v < 1:
            raise ValueError("MAX_UPLOAD_SIZE_MB must be >= 1")
        if v > 1000:
            raise ValueError("MAX_UPLOAD_SIZE_MB must be <= 1000")
        return v


settings = Settings()
