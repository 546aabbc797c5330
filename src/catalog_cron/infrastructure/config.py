"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file).

    Built once at process start and handed to the use case; nothing below the
    interface layer reads the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cron_secret: SecretStr
    site_url: str
    database_url: SecretStr
    db_min_pool_size: int = 1
    db_max_pool_size: int = 5

    kv_rest_api_url: str
    kv_rest_api_token: SecretStr

    algolia_app_id: str
    algolia_admin_api_key: SecretStr
    algolia_index_task_id: str
    algolia_data_url: str = "https://data.us.algolia.com"

    beehiiv_api_key: SecretStr | None = None
    beehiiv_publication_id: str | None = None

    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("site_url", "kv_rest_api_url", "algolia_data_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def newsletter_configured(self) -> bool:
        return bool(self.beehiiv_api_key and self.beehiiv_publication_id)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
