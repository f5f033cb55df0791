"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Mailbridge"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Provider selection
    email_provider: Literal["sendgrid", "mailgun", "smtp", "loopback"] | None = None
    email_send_in_batch: bool = False
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Sendgrid
    sendgrid_api_key: SecretStr | None = None

    # Mailgun
    mailgun_api_key: SecretStr | None = None
    mailgun_domain: str | None = None
    mailgun_eu: bool = False

    # SMTP
    smtp_host: str | None = None
    smtp_port: int = 25
    smtp_username: str = ""
    smtp_password: SecretStr = Field(default=SecretStr(""))
    smtp_secure: Literal["", "ssl", "tls"] = ""
    smtp_auto_tls: bool = False
    smtp_x_mailer: str = ""


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
