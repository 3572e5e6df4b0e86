from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from weatherapp.openweather_client import OpenWeatherClient
from weatherapp.preferences import InMemoryKeyValueStore, LastCityStore
from weatherapp.schemas import Weather
from weatherapp.state import WeatherViewModel
from weatherapp.use_cases import GetWeatherByCity, GetWeatherByLocation

BASE_URL = "https://api.test/data/2.5"


def krugerville_payload() -> dict[str, Any]:
    return {
        "coord": {"lon": -96.99, "lat": 33.28},
        "name": "Krugerville",
        "main": {"temp": 8.7, "humidity": 60},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    }


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> OpenWeatherClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenWeatherClient(http=http, api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def weather() -> Weather:
    return Weather(
        city="Krugerville",
        temperature=8.7,
        description="clear sky",
        icon_url="https://openweathermap.org/img/wn/01d@2x.png",
    )


@pytest.fixture
def repository() -> Mock:
    repo = Mock()
    repo.fetch_by_city = AsyncMock()
    repo.fetch_by_coordinates = AsyncMock()
    return repo


@pytest.fixture
def last_city_store() -> Mock:
    return Mock(spec=LastCityStore)


@pytest.fixture
def view_model(repository: Mock, last_city_store: Mock) -> WeatherViewModel:
    return WeatherViewModel(
        get_weather_by_city=GetWeatherByCity(repository),
        get_weather_by_location=GetWeatherByLocation(repository),
        last_city_store=last_city_store,
    )


@pytest.fixture
def memory_store() -> LastCityStore:
    return LastCityStore(InMemoryKeyValueStore())
