"""Request orchestration: validate, resolve location, resolve weather."""

from __future__ import annotations

import structlog

from cepweather.config import Settings
from cepweather.errors import UpstreamError
from cepweather.location import LocationResolver
from cepweather.models import ErrorKind, ErrorOutcome, TemperatureReading
from cepweather.validator import is_valid_cep
from cepweather.weather import WeatherResolver

logger = structlog.get_logger()

INVALID_ZIPCODE = "invalid zipcode"
ZIPCODE_NOT_FOUND = "can not find zipcode"
INTERNAL_FAILURE = "Internal Server Error"


class WeatherService:
    """Turns a raw postal code into a temperature reading or an error outcome.

    Holds no state besides its configuration; safe to share across
    concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        location_resolver: LocationResolver | None = None,
        weather_resolver: WeatherResolver | None = None,
    ):
        self.settings = settings
        self.locations = location_resolver or LocationResolver(settings)
        self.weather = weather_resolver or WeatherResolver(settings)

    async def handle_weather_request(self, raw_cep: str) -> TemperatureReading | ErrorOutcome:
        if not is_valid_cep(raw_cep):
            logger.info("cep_invalid", cep=raw_cep)
            return ErrorOutcome(ErrorKind.INVALID_INPUT, INVALID_ZIPCODE)

        try:
            location = await self.locations.resolve(raw_cep)
        except UpstreamError as e:
            logger.error("location_lookup_failed", cep=raw_cep, service=e.service, error=str(e))
            return ErrorOutcome(ErrorKind.INTERNAL_FAILURE, INTERNAL_FAILURE)

        if location is None:
            return ErrorOutcome(ErrorKind.NOT_FOUND, ZIPCODE_NOT_FOUND)

        try:
            reading = await self.weather.resolve(location.city)
        except UpstreamError as e:
            logger.error(
                "weather_lookup_failed",
                cep=raw_cep,
                city=location.city,
                service=e.service,
                error=str(e),
            )
            return ErrorOutcome(ErrorKind.INTERNAL_FAILURE, INTERNAL_FAILURE)

        logger.info(
            "weather_resolved",
            cep=raw_cep,
            city=location.city,
            state=location.state,
            temp_c=reading.celsius,
        )
        return reading
