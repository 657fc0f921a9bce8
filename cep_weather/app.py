"""
FastAPI application exposing GET /weather/{cep}.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Receive, Scope, Send

from cep_weather import __version__
from cep_weather.config import Settings
from cep_weather.errors import ERROR_INTERNAL_SERVER, WeatherGatewayError
from cep_weather.models import WeatherResponse
from cep_weather.weather_service import WeatherService

logger = logging.getLogger(__name__)

USAGE_MESSAGE = "Usage: /weather/{cep}"


class WeatherJSONResponse(JSONResponse):
    """
    JSON response whose body write failures are logged, not raised.

    Once the status line is sent the response is committed, so a failure
    while writing the body can only be reported in the logs.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.raw_headers,
            }
        )
        try:
            await send({"type": "http.response.body", "body": self.body})
        except OSError as e:
            logger.error(
                "Error writing success response for %s: %s", scope.get("path"), e
            )
            return

        if self.background is not None:
            await self.background()


def get_weather_service(request: Request) -> WeatherService:
    """Return the service instance bound to the application."""
    return request.app.state.weather_service


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Startup configuration; read from the environment when omitted

    Returns:
        FastAPI: Configured application

    Raises:
        ConfigurationError: If settings are omitted and the environment lacks
            the WeatherAPI key
    """
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title="CEP Weather API",
        description="Current temperature for the city of a Brazilian CEP",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.weather_service = WeatherService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get(
        "/weather/{cep}",
        response_model=WeatherResponse,
        response_class=WeatherJSONResponse,
    )
    async def get_weather(
        cep: str, service: WeatherService = Depends(get_weather_service)
    ):
        """
        Get the current temperature for the city of a CEP.

        Args:
            cep: Eight-digit postal code, without separators

        Returns:
            WeatherJSONResponse: temp_C, temp_F and temp_K
        """
        weather = await service.get_weather(cep)
        return WeatherJSONResponse(content=weather.model_dump(by_alias=True))

    # An empty CEP segment is a malformed CEP, not an unknown path
    @app.get("/weather/", include_in_schema=False)
    async def get_weather_empty_cep(
        service: WeatherService = Depends(get_weather_service),
    ):
        return await get_weather("", service)

    @app.exception_handler(WeatherGatewayError)
    async def gateway_error_handler(request: Request, exc: WeatherGatewayError):
        """Translate gateway errors into their fixed plain-text responses."""
        return PlainTextResponse(exc.detail, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        """Answer unmatched paths with the usage hint."""
        if exc.status_code == 404:
            return PlainTextResponse(USAGE_MESSAGE, status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error("Unhandled exception on %s: %s", request.url.path, exc)
        return PlainTextResponse(ERROR_INTERNAL_SERVER, status_code=500)

    return app
