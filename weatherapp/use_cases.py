from __future__ import annotations

from weatherapp.errors import classify_error
from weatherapp.repository import WeatherRepository
from weatherapp.result import Failure, Result, Success
from weatherapp.schemas import Weather


class GetWeatherByCity:
    def __init__(self, repository: WeatherRepository) -> None:
        self._repository = repository

    async def __call__(self, city: str) -> Result[Weather]:
        try:
            weather = await self._repository.fetch_by_city(city)
        except Exception as e:
            return Failure(classify_error(e))
        return Success(weather)


class GetWeatherByLocation:
    def __init__(self, repository: WeatherRepository) -> None:
        self._repository = repository

    async def __call__(self, latitude: float, longitude: float) -> Result[Weather]:
        try:
            weather = await self._repository.fetch_by_coordinates(latitude, longitude)
        except Exception as e:
            return Failure(classify_error(e))
        return Success(weather)
