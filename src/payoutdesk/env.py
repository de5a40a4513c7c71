from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Typed console settings built from environment variables."""

    api_base_url: str
    api_token: Optional[str] = None
    http_timeout: float = Field(30.0, gt=0)
    page_size: int = Field(20, ge=1)
    # Seconds a cached read is served before it is refetched
    cache_stale_after: float = Field(120.0, ge=0)
    log_level: str = "INFO"

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        if not v:
            raise ValueError("API base URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("API base URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("API base URL must include a host")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    api_base_url = os.environ.get("PAYOUTDESK_API_BASE_URL")
    if not api_base_url:
        raise ValueError("PAYOUTDESK_API_BASE_URL is required")
    return Settings(
        api_base_url=api_base_url,
        api_token=os.environ.get("PAYOUTDESK_API_TOKEN") or None,
        http_timeout=float(os.environ.get("PAYOUTDESK_HTTP_TIMEOUT", "30")),
        page_size=int(os.environ.get("PAYOUTDESK_PAGE_SIZE", "20")),
        cache_stale_after=float(os.environ.get("PAYOUTDESK_CACHE_STALE_AFTER", "120")),
        log_level=os.environ.get("PAYOUTDESK_LOG_LEVEL", "INFO"),
    )
