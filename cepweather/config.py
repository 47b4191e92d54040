"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cepweather.errors import ConfigError


class Settings(BaseSettings):
    """Service settings loaded from environment variables.

    Built once at startup and passed explicitly to the app and the
    orchestrator.  Instances are frozen.
    """

    # HTTP server
    port: int = 8080
    log_level: str = "info"

    # Upstreams
    weather_api_key: str = ""
    viacep_base_url: str = "http://viacep.com.br"
    weather_api_base_url: str = "https://api.weatherapi.com"

    # Timeouts in seconds. Each upstream call must fit inside the request deadline.
    request_timeout: float = 60.0
    upstream_timeout: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    @model_validator(mode="after")
    def check_timeouts(self) -> Settings:
        if self.request_timeout <= 0 or self.upstream_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.upstream_timeout > self.request_timeout:
            raise ValueError(
                f"upstream_timeout ({self.upstream_timeout}s) must not exceed "
                f"request_timeout ({self.request_timeout}s)"
            )
        return self


def load_settings(env_file: str | Path = ".env") -> Settings:
    """Build settings for a service process.

    ``PORT`` is normally provided by the hosting platform.  When it is
    missing the ``.env`` file becomes mandatory; running without either is
    a fatal startup condition.
    """
    env_path = Path(env_file)
    if not os.environ.get("PORT") and not env_path.is_file():
        raise ConfigError(f"PORT is not set and env file {str(env_path)!r} was not found")
    return Settings(_env_file=env_path)
