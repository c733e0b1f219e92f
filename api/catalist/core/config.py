"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:8081", "http://127.0.0.1:8081"]
DEFAULT_CREDENTIAL_PLACEHOLDERS = ["your-api-key", "your-google-maps-api-key", "changeme"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Catalist API"
    environment: str = "development"
    api_prefix: str = "/api"

    database_url: str = "sqlite+aiosqlite:///./catalist.db"

    google_maps_api_key: Optional[str] = None
    tmdb_api_key: Optional[str] = None
    tmdb_api_auth_header: Optional[str] = None
    google_books_api_key: Optional[str] = None
    rawg_api_key: Optional[str] = None
    youtube_api_key: Optional[str] = None
    avatar_storage_base_url: Optional[str] = None
    credential_placeholders: list[str] | str = Field(
        default_factory=lambda: DEFAULT_CREDENTIAL_PLACEHOLDERS.copy()
    )

    search_language: str = "en-US"
    places_language: str = "en"
    places_region: Optional[str] = None
    provider_timeout_seconds: float = 15.0
    provider_max_attempts: int = 1
    provider_circuit_threshold: int = 3
    provider_circuit_backoff_seconds: float = 15.0
    provider_circuit_max_backoff_seconds: float = 300.0
    search_debounce_seconds: float = 0.5
    discover_items_per_category: int = 6

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins from JSON, CSV, or list inputs."""
        return _split_list(value) or DEFAULT_CORS_ORIGINS.copy()

    @field_validator("credential_placeholders", mode="before")
    @classmethod
    def _split_credential_placeholders(cls, value: str | list[str] | None) -> list[str]:
        """Normalize placeholder sentinels from JSON, CSV, or list inputs."""
        return [item.casefold() for item in _split_list(value)]

    def credential_for(self, provider: str) -> str | None:
        """Return the configured secret for a provider, or None when absent.

        Placeholder sentinels copied from sample env files count as absent so the
        provider runs in mock fallback mode instead of failing upstream.
        """
        attribute = PROVIDER_CREDENTIAL_FIELDS.get(provider)
        if attribute is None:
            return None
        candidates = attribute if isinstance(attribute, tuple) else (attribute,)
        for name in candidates:
            value = getattr(self, name, None)
            if self.is_usable_credential(value):
                return value.strip()
        return None

    def is_usable_credential(self, value: str | None) -> bool:
        """Return True when a secret is present and not a placeholder."""
        if not value or not value.strip():
            return False
        placeholders = self.credential_placeholders
        if isinstance(placeholders, str):
            placeholders = _split_list(placeholders)
        return value.strip().casefold() not in {item.casefold() for item in placeholders}

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


PROVIDER_CREDENTIAL_FIELDS: dict[str, str | tuple[str, ...]] = {
    "places": "google_maps_api_key",
    "tmdb": ("tmdb_api_auth_header", "tmdb_api_key"),
    "games": "rawg_api_key",
    "books": "google_books_api_key",
    "video": "youtube_api_key",
}


def _split_list(value: str | list[str] | None) -> list[str]:
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item).strip() for item in parsed if str(item).strip()]
        return [item.strip() for item in stripped.split(",") if item.strip()]
    return []


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
