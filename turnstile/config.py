"""
Configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file). The
secret key env var is TURNSTILE_SECRET_KEY, the name Cloudflare's own docs
use, so existing deployments pick it up without renaming.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TurnstileSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    turnstile_secret_key: SecretStr = SecretStr("")
    turnstile_timeout_seconds: float = 10.0

    # "bundled" trusts the certifi CA bundle, "native" the OS trust store
    turnstile_tls_backend: Literal["bundled", "native"] = "bundled"

    # Attach a fresh idempotency key to requests that don't carry one
    turnstile_idempotency: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.turnstile_secret_key.get_secret_value())


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"  # "json" in production

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"

    # Sub-configs (composed via model_validator below)
    turnstile: Optional[TurnstileSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.turnstile is None:
            self.turnstile = TurnstileSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
