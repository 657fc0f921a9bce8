"""
Configuration constants and startup settings for the CEP weather gateway.
"""

import math
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from cep_weather.errors import ConfigurationError


class ExternalAPIConfig:
    """External API configuration"""

    VIACEP_BASE_URL = "https://viacep.com.br"
    WEATHERAPI_BASE_URL = "https://api.weatherapi.com"
    REQUEST_TIMEOUT = 10

    # WeatherAPI error code for "No matching location found."
    WEATHERAPI_NOT_FOUND_CODE = 1006


class LambdaConfig:
    """Lambda-specific configuration"""

    # Environment variables
    ENV = os.getenv("ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_PORT = 8080

    WEATHER_API_KEY_ENV_VAR = "WEATHER_API_KEY"


class Settings(BaseModel):
    """Immutable settings built once at startup and passed to the service."""

    model_config = ConfigDict(frozen=True)

    weather_api_key: str
    viacep_base_url: str = ExternalAPIConfig.VIACEP_BASE_URL
    weather_api_base_url: str = ExternalAPIConfig.WEATHERAPI_BASE_URL
    request_timeout: float = ExternalAPIConfig.REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings: Startup configuration

        Raises:
            ConfigurationError: If the WeatherAPI key is not configured
        """
        environ = os.environ if environ is None else environ

        api_key = environ.get(LambdaConfig.WEATHER_API_KEY_ENV_VAR, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"{LambdaConfig.WEATHER_API_KEY_ENV_VAR} environment variable not set"
            )

        viacep_url = environ.get("VIACEP_BASE_URL") or ExternalAPIConfig.VIACEP_BASE_URL
        weather_url = (
            environ.get("WEATHERAPI_BASE_URL") or ExternalAPIConfig.WEATHERAPI_BASE_URL
        )

        try:
            timeout = float(
                environ.get("REQUEST_TIMEOUT", ExternalAPIConfig.REQUEST_TIMEOUT)
            )
        except ValueError as e:
            raise ConfigurationError("REQUEST_TIMEOUT must be a number") from e
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be a positive number")

        return cls(
            weather_api_key=api_key,
            viacep_base_url=viacep_url.rstrip("/"),
            weather_api_base_url=weather_url.rstrip("/"),
            request_timeout=timeout,
        )
