"""Runtime settings for lazypr itself."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Settings loaded from environment variables or a .env file.

    All settings are prefixed with LAZYPR_ (e.g., LAZYPR_CONFIG_PATH).
    """

    model_config = SettingsConfigDict(
        env_prefix="LAZYPR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path = Field(
        default_factory=lambda: Path.home() / ".lazypr",
        description="Location of the KEY=VALUE configuration file",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
