"""
External API clients for ViaCEP (CEP -> city) and WeatherAPI (city -> temperature).
"""

import asyncio
import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError

from cep_weather.config import ExternalAPIConfig
from cep_weather.errors import UpstreamError, ZipcodeNotFoundError
from cep_weather.models import ViaCEPResponse, WeatherAPIResponse

logger = logging.getLogger(__name__)

VIACEP_SERVICE = "viacep"
WEATHERAPI_SERVICE = "weatherapi"


def _is_success(status: int) -> bool:
    return 200 <= status < 300


async def _fetch(
    url: str,
    timeout: aiohttp.ClientTimeout,
    service: str,
    params: Optional[dict] = None,
) -> tuple[int, bytes]:
    """
    Issue a GET request and return the status code and raw body.

    Raises:
        UpstreamError: On connection failures and timeouts
    """
    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url, params=params) as response:
                return response.status, await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise UpstreamError(
            f"failed to execute {service} request: {e!r}", service=service
        ) from e


class ViaCEPClient:
    """
    Asynchronous client resolving a CEP to its city through ViaCEP.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the ViaCEP client.

        Args:
            base_url: ViaCEP base URL (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
        """
        self.base_url = (base_url or ExternalAPIConfig.VIACEP_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else ExternalAPIConfig.REQUEST_TIMEOUT
        )

    async def get_city(self, cep: str) -> str:
        """
        Resolve a CEP to a city name.

        Args:
            cep: Eight-digit postal code

        Returns:
            str: Trimmed city name

        Raises:
            ZipcodeNotFoundError: If ViaCEP flags the CEP as unknown, returns no city,
                or answers with a body that is not the expected JSON
            UpstreamError: On transport failures or non-success statuses
        """
        url = f"{self.base_url}/ws/{cep}/json/"
        logger.debug("Requesting city for CEP: %s", cep)

        status, body = await _fetch(url, self.timeout, VIACEP_SERVICE)
        payload = self._decode(body)

        if not _is_success(status):
            if payload is not None and payload.error:
                raise ZipcodeNotFoundError(f"ViaCEP has no entry for CEP {cep}")
            raise UpstreamError(
                f"ViaCEP request failed with status: {status}",
                service=VIACEP_SERVICE,
                upstream_status=status,
            )

        # An undecodable body is reported as not found, same as {"erro": true}
        if payload is None:
            raise ZipcodeNotFoundError(f"ViaCEP returned an unexpected body for {cep}")

        city = payload.locality.strip()
        if payload.error or not city:
            raise ZipcodeNotFoundError(f"ViaCEP has no entry for CEP {cep}")

        logger.info("CEP %s resolved to city: %s", cep, city)
        return city

    @staticmethod
    def _decode(body: bytes) -> Optional[ViaCEPResponse]:
        try:
            return ViaCEPResponse.model_validate_json(body)
        except ValidationError:
            return None


class WeatherAPIClient:
    """
    Asynchronous client for the WeatherAPI current conditions endpoint.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the WeatherAPI client.

        Args:
            api_key: WeatherAPI key
            base_url: WeatherAPI base URL (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
        """
        self.api_key = api_key
        self.base_url = (base_url or ExternalAPIConfig.WEATHERAPI_BASE_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else ExternalAPIConfig.REQUEST_TIMEOUT
        )

    async def get_temperature(self, city: str) -> float:
        """
        Get the current temperature in Celsius for a city.

        WeatherAPI reports errors both through HTTP statuses and through an
        ``error`` object in 200 responses, so both are checked; once the body
        decodes, its content takes precedence over the status.

        Args:
            city: City name as resolved from the CEP

        Returns:
            float: Current temperature in Celsius

        Raises:
            ZipcodeNotFoundError: If WeatherAPI has no matching location
            UpstreamError: For every other failure
        """
        params = {"key": self.api_key, "q": city, "aqi": "no"}
        url = f"{self.base_url}/v1/current.json"
        logger.debug("Requesting weather data for city: %s", city)

        status, body = await _fetch(url, self.timeout, WEATHERAPI_SERVICE, params)

        try:
            payload = WeatherAPIResponse.model_validate_json(body)
        except ValidationError as e:
            if not _is_success(status):
                raise UpstreamError(
                    f"WeatherAPI request failed with status {status} "
                    "and couldn't decode error body",
                    service=WEATHERAPI_SERVICE,
                    upstream_status=status,
                ) from e
            raise UpstreamError(
                "failed to decode WeatherAPI response even with status OK",
                service=WEATHERAPI_SERVICE,
                upstream_status=status,
            ) from e

        if payload.error is not None:
            if payload.error.code == ExternalAPIConfig.WEATHERAPI_NOT_FOUND_CODE:
                logger.warning(
                    "WeatherAPI could not find city '%s'. Error code: %d, Message: %s",
                    city,
                    payload.error.code,
                    payload.error.message,
                )
                raise ZipcodeNotFoundError(f"WeatherAPI has no location for {city}")
            raise UpstreamError(
                f"WeatherAPI error: code {payload.error.code}, "
                f"message: {payload.error.message}",
                service=WEATHERAPI_SERVICE,
                upstream_status=status,
            )

        if not _is_success(status):
            raise UpstreamError(
                f"WeatherAPI request failed with status: {status} "
                "(but no error structure in body)",
                service=WEATHERAPI_SERVICE,
                upstream_status=status,
            )

        if payload.current is None:
            raise UpstreamError(
                "WeatherAPI response has no current conditions",
                service=WEATHERAPI_SERVICE,
                upstream_status=status,
            )

        logger.info("Weather for city %s: %.1f°C", city, payload.current.temp_c)
        return payload.current.temp_c
