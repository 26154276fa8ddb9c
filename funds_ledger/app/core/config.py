from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Funds Ledger API"
    database_url: str = "sqlite:///funds_ledger.db"
    log_level: str = "INFO"
    api_prefix: str = "/v1"
    default_page_limit: int = 10
    # bearer token -> role name
    api_tokens: dict[str, str] = {}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LEDGER_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
