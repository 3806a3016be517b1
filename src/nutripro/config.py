"""Application configuration."""

import os
from datetime import tzinfo
from enum import Enum
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class SourceKind(Enum):
    """Where the base food catalog is loaded from."""

    URL = "url"
    FILE = "file"
    NONE = "none"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    food_source_url: str | None = None
    food_source_path: str | None = None
    cases_path: str | None = None
    catalog_page_size: int = 20
    http_timeout_seconds: float = 15
    log_level: str = "INFO"
    timezone: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_timezone(settings: Settings) -> tzinfo | None:
    """Timezone for report dates; None means the server's local time."""
    if settings.timezone and settings.timezone.strip():
        return ZoneInfo(settings.timezone.strip())
    return None


def resolve_source_kind(settings: Settings) -> SourceKind:
    """Pick the catalog source; a URL wins over a file path."""
    if settings.food_source_url and settings.food_source_url.strip():
        return SourceKind.URL
    if settings.food_source_path and settings.food_source_path.strip():
        return SourceKind.FILE
    return SourceKind.NONE
