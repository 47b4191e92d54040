"""WeatherAPI client — current temperature for a city."""

from __future__ import annotations

from cepweather.config import Settings
from cepweather.fetch import fetch_json
from cepweather.models import TemperatureReading, WeatherApiResponse

SERVICE_NAME = "weatherapi"


class WeatherResolver:
    """Async client for the weatherapi.com current conditions endpoint."""

    def __init__(self, settings: Settings):
        self.url = f"{settings.weather_api_base_url.rstrip('/')}/v1/current.json"
        self.api_key = settings.weather_api_key
        self.timeout = settings.upstream_timeout

    async def resolve(self, city: str) -> TemperatureReading:
        """Fetch the current temperature for ``city``.

        The city name is passed through as-is; an empty or unknown name
        gets whatever answer WeatherAPI gives for it.
        """
        params = {"key": self.api_key, "q": city, "aqi": "no"}

        data = await fetch_json(
            self.url,
            WeatherApiResponse,
            service=SERVICE_NAME,
            params=params,
            timeout=self.timeout,
            secrets=(self.api_key,),
        )

        return TemperatureReading.from_celsius(data.current.temp_c, data.current.temp_f)
