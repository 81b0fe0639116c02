"""Settings for the fragments service, read from the environment and .env.

get_settings() is the only way code should obtain them.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.enums import StorageBackend


class Settings(BaseSettings):
    """Service configuration. Every field has a default; memory storage is the default backend."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: str = "fragments"
    app_version: str = "1.0.0"
    debug: bool = False

    # Base for Location headers, e.g. https://fragments.example.com.
    # Unset means the request's own base URL.
    api_url: str | None = None
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    storage_backend: str = StorageBackend.MEMORY.value
    storage_root: str = "/var/fragments/storage"
    max_fragment_size: int = Field(default=5 * 1024 * 1024, description="Largest accepted body in bytes")

    # Set by the upstream auth proxy to the authenticated principal.
    owner_header_name: str = "X-Owner-ID"
    request_id_header: str = "X-Request-ID"

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        backend = self.storage_backend.lower()
        if backend not in StorageBackend.values():
            choices = ", ".join(repr(v) for v in StorageBackend.values())
            raise ValueError(f"Invalid storage_backend '{self.storage_backend}'. Must be one of: {choices}")
        if backend == StorageBackend.LOCAL and not self.storage_root:
            raise ValueError("storage_root is required when storage_backend is 'local' (set STORAGE_ROOT)")
        if self.max_fragment_size <= 0:
            raise ValueError("max_fragment_size must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, loading and validating them on first call.

    Tests that change the environment call get_settings.cache_clear() first.
    """
    return Settings()
