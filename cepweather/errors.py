"""Exception hierarchy for the CEP weather service."""

from __future__ import annotations


class CepWeatherError(Exception):
    """Base error for cep-weather."""


class ConfigError(CepWeatherError):
    """Raised when the service cannot be configured at startup."""


class UpstreamError(CepWeatherError):
    """Raised when a call to an upstream API fails."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service


class TransportError(UpstreamError):
    """Connection failure, timeout, or non-2xx response from an upstream."""

    def __init__(self, service: str, message: str, status_code: int | None = None):
        super().__init__(service, message)
        self.status_code = status_code


class DecodeError(UpstreamError):
    """Upstream response body could not be decoded into the expected shape."""
