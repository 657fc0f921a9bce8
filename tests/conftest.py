"""
Pytest configuration and shared fixtures.
"""

import asyncio
from typing import Awaitable, Callable, List, Tuple, TypeVar

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from cep_weather.config import Settings

T = TypeVar("T")


class FakeUpstream:
    """
    In-process stand-in for ViaCEP and WeatherAPI.

    Each service answers with the configured (status, body) pair and records
    what it was asked for.
    """

    def __init__(self) -> None:
        self.viacep: Tuple[int, str] = (200, "")
        self.weather: Tuple[int, str] = (200, "")
        self.delay: float = 0.0
        self.viacep_requests: List[str] = []
        self.weather_requests: List[dict] = []

    async def _viacep_handler(self, request: web.Request) -> web.Response:
        self.viacep_requests.append(request.match_info["cep"])
        if self.delay:
            await asyncio.sleep(self.delay)
        status, body = self.viacep
        return web.Response(status=status, text=body)

    async def _weather_handler(self, request: web.Request) -> web.Response:
        self.weather_requests.append(dict(request.query))
        status, body = self.weather
        return web.Response(status=status, text=body)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/ws/{cep}/json/", self._viacep_handler)
        app.router.add_get("/v1/current.json", self._weather_handler)
        return app


@pytest.fixture
def sample_api_key() -> str:
    """Sample WeatherAPI key for testing."""
    return "test_weatherapi_key_123"


@pytest.fixture
def settings(sample_api_key) -> Settings:
    """Settings pointing at the public upstreams (never contacted in unit tests)."""
    return Settings(weather_api_key=sample_api_key)


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake upstream services with empty default responses."""
    return FakeUpstream()


@pytest.fixture
def run_with_upstream(
    upstream, sample_api_key
) -> Callable[[Callable[[Settings], Awaitable[T]]], T]:
    """
    Run an async scenario against the fake upstream.

    The scenario receives Settings whose base URLs point at the fake server.
    """

    def _run(scenario: Callable[[Settings], Awaitable[T]], timeout: float = 10) -> T:
        async def _main() -> T:
            server = TestServer(upstream.make_app())
            await server.start_server()
            try:
                base_url = f"http://{server.host}:{server.port}"
                upstream_settings = Settings(
                    weather_api_key=sample_api_key,
                    viacep_base_url=base_url,
                    weather_api_base_url=base_url,
                    request_timeout=timeout,
                )
                return await scenario(upstream_settings)
            finally:
                await server.close()

        return asyncio.run(_main())

    return _run


@pytest.fixture
def viacep_sao_paulo() -> str:
    """ViaCEP response for CEP 01001000."""
    return (
        '{"cep": "01001-000", "logradouro": "Praça da Sé", "complemento": "lado ímpar",'
        ' "bairro": "Sé", "localidade": "São Paulo", "uf": "SP", "ibge": "3550308",'
        ' "gia": "1004", "ddd": "11", "siafi": "7107"}'
    )


@pytest.fixture
def weatherapi_current() -> str:
    """WeatherAPI current.json response at 25.5°C."""
    return '{"location": {"name": "Sao Paulo"}, "current": {"temp_c": 25.5}}'
