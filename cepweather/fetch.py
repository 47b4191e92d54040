"""Generic JSON fetch helper shared by the upstream resolvers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from cepweather.errors import DecodeError, TransportError

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)

REDACTED = "[REDACTED]"


def _scrub(text: str, secrets: Sequence[str]) -> str:
    """Mask secret values (API keys in query strings) before logging."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


async def fetch_json(
    url: str,
    model: type[ModelT],
    *,
    service: str,
    params: dict[str, Any] | None = None,
    timeout: float = 10.0,
    secrets: Sequence[str] = (),
) -> ModelT:
    """GET ``url`` and decode the JSON body into ``model``.

    Redirects are followed.  Any of ``secrets`` found in logged text or in
    the raised error's message is replaced with ``[REDACTED]``.

    Raises:
        TransportError: On connection failure, timeout, or a non-2xx status.
        DecodeError: If the body is not JSON or does not fit ``model``.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.get(url, params=params, headers={"Accept": "application/json"})
            resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(
            "upstream_http_error",
            service=service,
            status=e.response.status_code,
            body=_scrub(e.response.text[:500], secrets),
        )
        raise TransportError(
            service, f"HTTP {e.response.status_code}", status_code=e.response.status_code
        ) from None
    except httpx.RequestError as e:
        error = _scrub(repr(e), secrets)
        logger.error("upstream_request_error", service=service, error=error)
        raise TransportError(service, f"request failed: {error}") from None

    try:
        return model.model_validate_json(resp.content)
    except ValidationError as e:
        logger.error("upstream_decode_error", service=service, error=_scrub(str(e), secrets))
        raise DecodeError(service, f"invalid response body: {e.error_count()} error(s)") from None
