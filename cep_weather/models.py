"""
Pydantic models for upstream payloads and the gateway response.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cep_weather.converter import celsius_to_fahrenheit, celsius_to_kelvin


class ViaCEPResponse(BaseModel):
    """Relevant part of a ViaCEP lookup response."""

    locality: str = Field("", alias="localidade", description="City name")
    error: bool = Field(False, alias="erro", description="CEP not found flag")


class WeatherAPIErrorBody(BaseModel):
    """Error object embedded in WeatherAPI responses."""

    code: int
    message: str = ""


class CurrentConditions(BaseModel):
    """Current conditions block of a WeatherAPI response."""

    temp_c: float


class WeatherAPIResponse(BaseModel):
    """Relevant part of a WeatherAPI current.json response."""

    current: Optional[CurrentConditions] = None
    error: Optional[WeatherAPIErrorBody] = None


class WeatherResponse(BaseModel):
    """Response model for the /weather/{cep} endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    celsius: float = Field(..., alias="temp_C")
    fahrenheit: float = Field(..., alias="temp_F")
    kelvin: float = Field(..., alias="temp_K")


class Temperature(BaseModel):
    """Temperature value object; Celsius is the source of truth."""

    model_config = ConfigDict(frozen=True)

    celsius: float

    @property
    def fahrenheit(self) -> float:
        return celsius_to_fahrenheit(self.celsius)

    @property
    def kelvin(self) -> float:
        return celsius_to_kelvin(self.celsius)

    def to_response(self) -> WeatherResponse:
        """Build the response payload; Celsius passes through unrounded."""
        return WeatherResponse(
            celsius=self.celsius,
            fahrenheit=self.fahrenheit,
            kelvin=self.kelvin,
        )
