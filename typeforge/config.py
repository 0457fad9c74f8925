"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Typeforge API"
    database_url: str = f"sqlite+pysqlite:///{_PROJECT_DIR / 'typeforge.db'}"
    root_type_name: str = "Root"
    int_min: int = -(2**63)
    int_max: int = 2**63 - 1
    # None enables every built-in layout.
    timestamp_layouts: list[str] | None = None
    parallel_threshold: int = Field(default=512, ge=2)
    max_workers: int | None = Field(default=None, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TYPEFORGE_",
        env_file=str(_PROJECT_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
