"""
Tests for the ViaCEP and WeatherAPI clients against an in-process fake upstream.
"""

import asyncio

import pytest

from cep_weather.errors import UpstreamError, ZipcodeNotFoundError
from cep_weather.external_api import ViaCEPClient, WeatherAPIClient


def viacep_client(settings):
    return ViaCEPClient(settings.viacep_base_url, settings.request_timeout)


def weather_client(settings):
    return WeatherAPIClient(
        settings.weather_api_key,
        settings.weather_api_base_url,
        settings.request_timeout,
    )


class TestViaCEPClient:
    """Test CEP to city resolution."""

    def test_resolves_city(self, upstream, run_with_upstream, viacep_sao_paulo):
        upstream.viacep = (200, viacep_sao_paulo)

        city = run_with_upstream(lambda s: viacep_client(s).get_city("01001000"))

        assert city == "São Paulo"
        assert upstream.viacep_requests == ["01001000"]

    def test_trims_locality(self, upstream, run_with_upstream):
        upstream.viacep = (200, '{"localidade": "  Campinas ", "erro": false}')

        city = run_with_upstream(lambda s: viacep_client(s).get_city("13010000"))

        assert city == "Campinas"

    @pytest.mark.parametrize(
        "body",
        [
            '{"erro": true}',
            '{"erro": "true"}',
            '{"localidade": "São Paulo", "erro": true}',
            '{"localidade": ""}',
            '{"localidade": "   "}',
            "{}",
        ],
    )
    def test_not_found_signals(self, upstream, run_with_upstream, body):
        upstream.viacep = (200, body)

        with pytest.raises(ZipcodeNotFoundError):
            run_with_upstream(lambda s: viacep_client(s).get_city("99999999"))

    @pytest.mark.parametrize("body", ["<html>oops</html>", "", "[1, 2]", '"text"'])
    def test_malformed_body_is_reported_as_not_found(
        self, upstream, run_with_upstream, body
    ):
        """An undecodable 200 body is deliberately treated like an unknown CEP."""
        upstream.viacep = (200, body)

        with pytest.raises(ZipcodeNotFoundError):
            run_with_upstream(lambda s: viacep_client(s).get_city("01001000"))

    def test_server_error_is_upstream_failure(self, upstream, run_with_upstream):
        upstream.viacep = (500, "Internal Server Error")

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: viacep_client(s).get_city("01001000"))

        assert exc_info.value.upstream_status == 500
        assert exc_info.value.service == "viacep"

    def test_error_status_with_clean_body_is_upstream_failure(
        self, upstream, run_with_upstream, viacep_sao_paulo
    ):
        upstream.viacep = (503, viacep_sao_paulo)

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: viacep_client(s).get_city("01001000"))

        assert exc_info.value.upstream_status == 503

    def test_error_status_with_not_found_body(self, upstream, run_with_upstream):
        upstream.viacep = (400, '{"erro": true}')

        with pytest.raises(ZipcodeNotFoundError):
            run_with_upstream(lambda s: viacep_client(s).get_city("01001000"))

    def test_connection_failure(self):
        client = ViaCEPClient("http://127.0.0.1:1", timeout=2)

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(client.get_city("01001000"))

        assert exc_info.value.upstream_status is None

    def test_timeout(self, upstream, run_with_upstream, viacep_sao_paulo):
        upstream.viacep = (200, viacep_sao_paulo)
        upstream.delay = 1.0

        with pytest.raises(UpstreamError):
            run_with_upstream(
                lambda s: viacep_client(s).get_city("01001000"), timeout=0.2
            )

    def test_default_configuration(self):
        client = ViaCEPClient()

        assert client.base_url == "https://viacep.com.br"
        assert client.timeout.total == 10

    def test_explicit_timeout_is_kept(self):
        assert ViaCEPClient(timeout=0.5).timeout.total == 0.5
        assert WeatherAPIClient("key", timeout=0.5).timeout.total == 0.5


class TestWeatherAPIClient:
    """Test current temperature lookup."""

    def test_returns_celsius(self, upstream, run_with_upstream, weatherapi_current):
        upstream.weather = (200, weatherapi_current)

        temp_c = run_with_upstream(
            lambda s: weather_client(s).get_temperature("São Paulo")
        )

        assert temp_c == 25.5

    def test_sends_key_and_encoded_city(
        self, upstream, run_with_upstream, sample_api_key, weatherapi_current
    ):
        upstream.weather = (200, weatherapi_current)

        run_with_upstream(
            lambda s: weather_client(s).get_temperature("São José dos Campos")
        )

        assert upstream.weather_requests == [
            {"key": sample_api_key, "q": "São José dos Campos", "aqi": "no"}
        ]

    def test_no_matching_location(self, upstream, run_with_upstream):
        upstream.weather = (
            400,
            '{"error": {"code": 1006, "message": "No matching location found."}}',
        )

        with pytest.raises(ZipcodeNotFoundError):
            run_with_upstream(lambda s: weather_client(s).get_temperature("Nowhere"))

    def test_error_body_wins_over_ok_status(self, upstream, run_with_upstream):
        upstream.weather = (
            200,
            '{"error": {"code": 1006, "message": "No matching location found."}}',
        )

        with pytest.raises(ZipcodeNotFoundError):
            run_with_upstream(lambda s: weather_client(s).get_temperature("Nowhere"))

    def test_other_error_codes_are_upstream_failures(self, upstream, run_with_upstream):
        upstream.weather = (
            401,
            '{"error": {"code": 2006, "message": "API key is invalid."}}',
        )

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: weather_client(s).get_temperature("Recife"))

        assert exc_info.value.upstream_status == 401
        assert "2006" in exc_info.value.message

    def test_undecodable_error_status(self, upstream, run_with_upstream):
        upstream.weather = (500, "Weather API Service Unavailable")

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: weather_client(s).get_temperature("Recife"))

        assert exc_info.value.upstream_status == 500

    def test_undecodable_ok_body_is_not_a_not_found(self, upstream, run_with_upstream):
        upstream.weather = (200, "<html>maintenance</html>")

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: weather_client(s).get_temperature("Recife"))

        assert "even with status OK" in exc_info.value.message

    def test_error_status_without_error_object(
        self, upstream, run_with_upstream, weatherapi_current
    ):
        upstream.weather = (502, weatherapi_current)

        with pytest.raises(UpstreamError) as exc_info:
            run_with_upstream(lambda s: weather_client(s).get_temperature("Recife"))

        assert exc_info.value.upstream_status == 502

    def test_missing_current_conditions(self, upstream, run_with_upstream):
        """
        A 200 without current conditions is a failure, not 0°C.

        This departs on purpose from earlier releases, which read the missing
        block as a zero temperature and answered 200.
        """
        upstream.weather = (200, '{"location": {"name": "Recife"}}')

        with pytest.raises(UpstreamError):
            run_with_upstream(lambda s: weather_client(s).get_temperature("Recife"))

    def test_connection_failure(self):
        client = WeatherAPIClient("key", "http://127.0.0.1:1", timeout=2)

        with pytest.raises(UpstreamError):
            asyncio.run(client.get_temperature("Recife"))
