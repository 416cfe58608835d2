"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Host names are the only place the simulated services are named; core receives
      them as BrowserHosts and never imports settings

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SQLite by default: the cache slot table is tiny and the service is single-user
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from goggles.core.address_codec import BrowserHosts


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./browser_cache.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Simulated hosts
    search_host: str = "www.goggles.com"
    search_host_aliases: list[str] = ["goggles.com"]
    archive_host: str = "playback.archive"
    mail_host: str = "mail.goggles.com"

    # Browser
    cache_ttl_ms: int = 3_600_000
    max_tabs: int = 10
    results_page_size: int = 10
    default_archive_date: str = "20240101"
    seed_path: str = "data/search_results.json"
    seed_strict: bool = False

    @field_validator("default_archive_date")
    @classmethod
    def check_archive_date(cls, v: str) -> str:
        if len(v) != 8 or not v.isdigit():
            raise ValueError("default_archive_date must be YYYYMMDD")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def hosts(self) -> BrowserHosts:
        return BrowserHosts(
            search_host=self.search_host,
            search_host_aliases=tuple(self.search_host_aliases),
            archive_host=self.archive_host,
            mail_host=self.mail_host,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
