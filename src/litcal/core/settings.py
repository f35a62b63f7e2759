"""
litcal.core.settings
--------------------
Runtime configuration, read from LITCAL_* environment variables or a .env file.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"
    log_file: Optional[str] = None
    # extra directory scanned for <name>.toml calendar definitions
    data_dir: Optional[str] = None
    default_calendar: str = "ef"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cache_size: int = Field(default=32, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LITCAL_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{value}'")
        return level


settings = Settings()
