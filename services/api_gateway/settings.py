from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Engine
    scoring_workers: int = 1
    cycle_timeout_sec: float | None = None
    waiting_ratio: float = 1.5
    low_priority_ceiling: float = 5.0

    app_version: str = "0.1.0"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
