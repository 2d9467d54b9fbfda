"""
Configuration management for orm-json-schema.

Settings are read from environment variables (prefix ``ORM_SCHEMA_``) and an
optional ``.env`` file using Pydantic BaseSettings. The schema engine itself is
pure; only logging and the emitted dialect URI are configurable.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DRAFT_07_URI = "http://json-schema.org/draft-07/schema#"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the ORM_SCHEMA_ prefix.
    For example, ORM_SCHEMA_LOG_LEVEL=DEBUG overrides log_level.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORM_SCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(
        default=False, description="Also write logs to a daily rotating file"
    )
    log_file_dir: str = Field(default="logs", description="Directory for log files")
    schema_dialect: str = Field(
        default=DRAFT_07_URI,
        description="URI emitted as $schema in root documents",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
