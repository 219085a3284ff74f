from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- storage ----
    storage_backend: Literal["memory", "json"] = "memory"
    data_file: Path = Path("data") / "movies.json"

    # ---- representation ----
    read_includes_id: bool = True  # expose `id` in read responses
    default_take: int = 50

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = 8000
    api_reload: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CATALOG_",      # CATALOG_STORAGE_BACKEND, CATALOG_LOG_LEVEL, etc.
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
