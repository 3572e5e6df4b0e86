from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from weatherapp.schemas import WeatherDto


logger = logging.getLogger(__name__)

UNITS = "metric"


class OpenWeatherClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        api_key: str,
        base_url: str,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def get_by_city(self, *, city: str) -> WeatherDto:
        return await self._get_current({"q": city})

    async def get_by_coordinates(self, *, latitude: float, longitude: float) -> WeatherDto:
        return await self._get_current({"lat": latitude, "lon": longitude})

    async def _get_current(self, query: dict[str, Any]) -> WeatherDto:
        url = f"{self._base_url}/weather"
        params = {**query, "appid": self._api_key, "units": UNITS}

        start = time.perf_counter()
        try:
            resp = await self._http.get(url, params=params)
            resp.raise_for_status()
        finally:
            logger.info(
                "openweather request query=%s duration_ms=%.2f",
                query,
                (time.perf_counter() - start) * 1000,
            )

        return WeatherDto.model_validate(resp.json())
