from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from weatherapp.errors import ErrorKind


class MainDto(BaseModel):
    temp: float


class WeatherInfoDto(BaseModel):
    description: str
    icon: str


class WeatherDto(BaseModel):
    """The part of the OpenWeatherMap current weather body the app reads."""

    name: str
    main: MainDto
    weather: List[WeatherInfoDto]


class Weather(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str
    temperature: float
    description: str
    icon_url: str


class ErrorResponse(BaseModel):
    kind: ErrorKind
    message: str
    code: Optional[int] = None


class WeatherStateResponse(BaseModel):
    weather: Optional[Weather] = None
    is_loading: bool = False
    error: Optional[ErrorResponse] = None


class CitySearchRequest(BaseModel):
    city: str = Field(max_length=100)


class LocationRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LastCityResponse(BaseModel):
    city: Optional[str] = None
