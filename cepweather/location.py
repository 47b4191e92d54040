"""ViaCEP client: resolve a postal code to an address."""

from __future__ import annotations

import structlog

from cepweather.config import Settings
from cepweather.fetch import fetch_json
from cepweather.models import LocationInfo, ViaCepResponse

logger = structlog.get_logger()

SERVICE_NAME = "viacep"


class LocationResolver:
    """Async client for the ViaCEP postal code API."""

    def __init__(self, settings: Settings):
        self.base_url = settings.viacep_base_url.rstrip("/")
        self.timeout = settings.upstream_timeout

    async def resolve(self, cep: str) -> LocationInfo | None:
        """Look up ``cep`` and return its address.

        Returns None when ViaCEP reports the code does not exist.

        Raises:
            TransportError: If ViaCEP cannot be reached or answers non-2xx.
            DecodeError: If the response body is malformed.
        """
        data = await fetch_json(
            f"{self.base_url}/ws/{cep}/json/",
            ViaCepResponse,
            service=SERVICE_NAME,
            timeout=self.timeout,
        )

        if data.erro:
            logger.info("cep_not_found", cep=cep)
            return None

        return LocationInfo(
            cep=data.cep,
            state=data.uf,
            city=data.localidade,
            neighborhood=data.bairro,
            street=data.logradouro,
        )
