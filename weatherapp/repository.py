from __future__ import annotations

import logging
from typing import Awaitable, Callable, Protocol

from weatherapp.errors import classify_error
from weatherapp.mapper import map_weather
from weatherapp.openweather_client import OpenWeatherClient
from weatherapp.schemas import Weather, WeatherDto


logger = logging.getLogger(__name__)


class WeatherRepository(Protocol):
    async def fetch_by_city(self, name: str) -> Weather: ...

    async def fetch_by_coordinates(self, latitude: float, longitude: float) -> Weather: ...


class OpenWeatherRepository:
    """
    WeatherRepository backed by the OpenWeatherMap current weather endpoint.
    Every failure leaves as a WeatherError chained to its cause.
    """

    def __init__(self, *, client: OpenWeatherClient) -> None:
        self._client = client

    async def fetch_by_city(self, name: str) -> Weather:
        return await self._execute(lambda: self._client.get_by_city(city=name))

    async def fetch_by_coordinates(self, latitude: float, longitude: float) -> Weather:
        return await self._execute(
            lambda: self._client.get_by_coordinates(latitude=latitude, longitude=longitude)
        )

    async def _execute(self, request: Callable[[], Awaitable[WeatherDto]]) -> Weather:
        try:
            dto = await request()
            return map_weather(dto)
        except Exception as e:
            error = classify_error(e)
            logger.warning(
                "weather fetch failed kind=%s code=%s message=%s",
                error.kind.value,
                error.code,
                error.message,
            )
            if error is e:
                raise
            raise error from e
