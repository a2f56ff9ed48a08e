"""fsgate configuration settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fsgate.infrastructure.config.settings_utils import (
    env_bool,
    env_int,
    env_list,
    env_paths,
    env_str,
)
from fsgate.infrastructure.logging_setup import configure_logging


class Settings(BaseSettings):
    """Application settings with env var support.

    `allowed_directories` only seeds the CLI when no directory arguments are
    given; the resulting roots are injected explicitly and never read back
    from this object.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server/observability
    api_host: str = Field(default_factory=lambda: env_str("FSGATE_HOST", "127.0.0.1"))
    api_port: int = Field(
        default_factory=lambda: env_int("FSGATE_PORT", 8080, minimum=1, maximum=65535)
    )
    log_level: str = Field(default_factory=lambda: env_str("FSGATE_LOG_LEVEL", "INFO"))
    log_json: bool = Field(default_factory=lambda: env_bool("FSGATE_LOG_JSON", False))
    cors_origins: list[str] = Field(
        default_factory=lambda: env_list("FSGATE_CORS_ORIGINS", default=["*"])
    )

    # Sandbox
    allowed_directories: list[str] = Field(
        default_factory=lambda: env_paths("FSGATE_ALLOWED_DIRS")
    )
    read_only: bool = Field(default_factory=lambda: env_bool("FSGATE_READ_ONLY", False))

    # Storage
    io_fsync: bool = Field(default_factory=lambda: env_bool("FSGATE_IO_FSYNC", True))

    def setup_logging(self, level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
        configure_logging(
            level=level or self.log_level,
            json_logs=self.log_json if json_logs is None else json_logs,
        )


# Global settings instance
settings = Settings()
