"""Canned upstream payloads for cep-weather tests."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

VIACEP_RESPONSE = {
    "cep": "30280-160",
    "logradouro": "Rua Conselheiro Lafaiete",
    "complemento": "",
    "unidade": "",
    "bairro": "Sagrada Família",
    "localidade": "Belo Horizonte",
    "uf": "MG",
    "estado": "Minas Gerais",
    "regiao": "Sudeste",
    "ibge": "3106200",
    "gia": "",
    "ddd": "31",
    "siafi": "4123",
}

VIACEP_RESPONSE_NOT_FOUND = {"erro": True}

# Older ViaCEP deployments send the flag as a string.
VIACEP_RESPONSE_NOT_FOUND_STR = {"erro": "true"}

VIACEP_RESPONSE_EMPTY_CITY = {
    "cep": "30280-160",
    "logradouro": "",
    "bairro": "",
    "localidade": "",
    "uf": "MG",
}

WEATHERAPI_RESPONSE = {
    "location": {
        "name": "Belo Horizonte",
        "region": "Minas Gerais",
        "country": "Brazil",
        "lat": -19.92,
        "lon": -43.94,
        "tz_id": "America/Sao_Paulo",
        "localtime": "2026-10-19 14:30",
    },
    "current": {
        "last_updated": "2026-10-19 14:30",
        "temp_c": 27.5,
        "temp_f": 81.5,
        "is_day": 1,
        "condition": {"text": "Partly cloudy", "code": 1003},
        "wind_kph": 11.2,
        "humidity": 48,
        "feelslike_c": 28.1,
        "feelslike_f": 82.6,
    },
}

WEATHERAPI_RESPONSE_NO_CURRENT = {"location": {"name": ""}}

WEATHERAPI_ERROR_RESPONSE = {
    "error": {"code": 1006, "message": "No matching location found."},
}


# ---------------------------------------------------------------------------
# httpx mocks
# ---------------------------------------------------------------------------


def make_response(payload, status_code: int = 200) -> MagicMock:
    """Build a mock httpx response carrying ``payload`` as its body."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = body
    resp.text = body.decode()
    if status_code >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            str(status_code), request=httpx.Request("GET", "http://upstream.test"), response=resp
        )
    else:
        resp.raise_for_status = MagicMock()
    return resp


def make_async_client(response=None, side_effect=None) -> AsyncMock:
    """Mock for ``async with httpx.AsyncClient(...) as client``."""
    client = AsyncMock()
    if side_effect is not None:
        client.get.side_effect = side_effect
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


_RealAsyncClient = httpx.AsyncClient


def patch_upstream(handler):
    """Route ``fetch_json``'s httpx client through an in-process ``MockTransport``.

    The real ``httpx.AsyncClient`` still builds and encodes the request, so
    redirects, query encoding and transport errors behave as on the wire.
    """

    def factory(**kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler), **kwargs)

    return patch("cepweather.fetch.httpx.AsyncClient", side_effect=factory)
