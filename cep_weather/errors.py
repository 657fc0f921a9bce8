"""
Error types for the CEP weather gateway.

Every failure in a request ends up as one of three client-facing kinds:
InvalidZipcodeError (422), ZipcodeNotFoundError (404) or UpstreamError (500).
"""

from typing import Optional

ERROR_INVALID_ZIPCODE = "invalid zipcode"
ERROR_CANNOT_FIND_ZIPCODE = "can not find zipcode"
ERROR_INTERNAL_SERVER = "internal server error"


class ConfigurationError(Exception):
    """Startup configuration is missing or invalid."""


class WeatherGatewayError(Exception):
    """Base exception for request-level failures."""

    status_code = 500
    detail = ERROR_INTERNAL_SERVER


class InvalidZipcodeError(WeatherGatewayError):
    """The CEP is not exactly eight decimal digits."""

    status_code = 422
    detail = ERROR_INVALID_ZIPCODE


class ZipcodeNotFoundError(WeatherGatewayError):
    """The CEP or its city is unknown to an upstream service."""

    status_code = 404
    detail = ERROR_CANNOT_FIND_ZIPCODE


class UpstreamError(WeatherGatewayError):
    """An upstream call failed in a way that is not a not-found signal."""

    def __init__(
        self,
        message: str,
        service: str,
        upstream_status: Optional[int] = None,
    ):
        self.message = message
        self.service = service
        self.upstream_status = upstream_status
        super().__init__(message)
