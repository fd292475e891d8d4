"""deploylog configuration management."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """deploylog configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="DEPLOYLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = "WARNING"
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format passed to logging.basicConfig",
    )

    # CLI output
    show_timestamps: bool = Field(
        default=True, description="Prefix rendered events with their start time"
    )
    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S", description="strftime format for the prefix"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


settings = Settings()
