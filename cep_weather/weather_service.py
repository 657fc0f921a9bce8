"""
Weather service layer: CEP validation, city resolution, weather lookup and conversion.
"""

import logging

from cep_weather.config import Settings
from cep_weather.errors import InvalidZipcodeError, UpstreamError
from cep_weather.external_api import ViaCEPClient, WeatherAPIClient
from cep_weather.models import Temperature, WeatherResponse
from cep_weather.validators import is_valid_cep

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Resolves a CEP to its city and reports the city's current temperature.

    One pass per request: the first failing step decides the outcome and
    nothing is retried.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the weather service.

        Args:
            settings: Startup configuration (API key, upstream URLs, timeout)
        """
        self.cep_client = ViaCEPClient(
            base_url=settings.viacep_base_url, timeout=settings.request_timeout
        )
        self.weather_client = WeatherAPIClient(
            settings.weather_api_key,
            base_url=settings.weather_api_base_url,
            timeout=settings.request_timeout,
        )

    async def get_weather(self, cep: str) -> WeatherResponse:
        """
        Get the current temperature for the city of a CEP.

        Args:
            cep: Candidate postal code from the request path

        Returns:
            WeatherResponse: Temperature in Celsius, Fahrenheit and Kelvin

        Raises:
            InvalidZipcodeError: If the CEP is not eight digits
            ZipcodeNotFoundError: If either upstream cannot find the location
            UpstreamError: If either upstream fails
        """
        if not is_valid_cep(cep):
            raise InvalidZipcodeError(f"invalid CEP format: {cep!r}")

        try:
            city = await self.cep_client.get_city(cep)
        except UpstreamError as e:
            logger.error(
                "Error getting city from CEP %s (upstream status: %s): %s",
                cep,
                e.upstream_status,
                e.message,
            )
            raise

        try:
            celsius = await self.weather_client.get_temperature(city)
        except UpstreamError as e:
            logger.error(
                "Error getting weather for city %s (from CEP %s, upstream status: %s): %s",
                city,
                cep,
                e.upstream_status,
                e.message,
            )
            raise

        return Temperature(celsius=celsius).to_response()
