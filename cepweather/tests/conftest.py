"""Shared fixtures for cep-weather tests."""

from __future__ import annotations

import pytest

from cepweather.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        port=8080,
        weather_api_key="test-key",
        viacep_base_url="http://viacep.test",
        weather_api_base_url="https://weatherapi.test",
        request_timeout=60.0,
        upstream_timeout=5.0,
    )
