from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from functools import lru_cache

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request

from weatherapp.openweather_client import OpenWeatherClient
from weatherapp.preferences import JsonFileKeyValueStore, LastCityStore
from weatherapp.repository import OpenWeatherRepository
from weatherapp.schemas import (
    CitySearchRequest,
    ErrorResponse,
    LastCityResponse,
    LocationRequest,
    WeatherStateResponse,
)
from weatherapp.settings import Settings
from weatherapp.state import WeatherState, WeatherViewModel
from weatherapp.use_cases import GetWeatherByCity, GetWeatherByLocation
from weatherapp.validation import validate_city_input


logger = logging.getLogger("weatherapp")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_view_model(request: Request) -> WeatherViewModel:
    return request.app.state.view_model


def get_last_city_store(request: Request) -> LastCityStore:
    return request.app.state.last_city_store


def _state_response(state: WeatherState) -> WeatherStateResponse:
    error = None
    if state.error is not None:
        error = ErrorResponse(
            kind=state.error.kind,
            message=state.error.message,
            code=state.error.code,
        )

    return WeatherStateResponse(
        weather=state.weather,
        is_loading=state.is_loading,
        error=error,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.setLevel(settings.log_level)

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds)
    )

    repository = OpenWeatherRepository(
        client=OpenWeatherClient(
            http=http_client,
            api_key=settings.openweather_api_key,
            base_url=settings.openweather_base_url,
        )
    )

    last_city_store = LastCityStore(JsonFileKeyValueStore(settings.preferences_path))
    app.state.last_city_store = last_city_store
    app.state.view_model = WeatherViewModel(
        get_weather_by_city=GetWeatherByCity(repository),
        get_weather_by_location=GetWeatherByLocation(repository),
        last_city_store=last_city_store,
    )

    logger.info("Application started")
    try:
        if settings.load_last_city_on_startup:
            await app.state.view_model.load_last_searched_city()
        yield
    finally:
        await http_client.aclose()
        logger.info("Application shutdown")


app = FastAPI(
    title="Weather App",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/state", response_model=WeatherStateResponse)
async def get_state(
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    return _state_response(view_model.state)


@app.post("/search", response_model=WeatherStateResponse)
async def search_city(
    body: CitySearchRequest,
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    normalized = " ".join(body.city.split())
    problem = validate_city_input(normalized)
    if problem is not None:
        raise HTTPException(status_code=422, detail=problem)

    await view_model.search_city(normalized)
    state = view_model.state
    if state.error is not None:
        logger.info("search failed city=%s kind=%s", normalized, state.error.kind.value)
    return _state_response(state)


@app.post("/location", response_model=WeatherStateResponse)
async def load_weather_by_location(
    body: LocationRequest,
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    await view_model.load_weather_by_location(body.latitude, body.longitude)
    return _state_response(view_model.state)


@app.post("/location/permission-denied", response_model=WeatherStateResponse)
async def location_permission_denied(
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    view_model.on_location_permission_denied()
    return _state_response(view_model.state)


@app.delete("/state/error", response_model=WeatherStateResponse)
async def clear_error(
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    view_model.clear_error()
    return _state_response(view_model.state)


@app.post("/last-city/load", response_model=WeatherStateResponse)
async def load_last_city(
    view_model: WeatherViewModel = Depends(get_view_model),
) -> WeatherStateResponse:
    await view_model.load_last_searched_city()
    return _state_response(view_model.state)


@app.get("/last-city", response_model=LastCityResponse)
async def get_last_city(
    store: LastCityStore = Depends(get_last_city_store),
) -> LastCityResponse:
    return LastCityResponse(city=await asyncio.to_thread(store.load))


@app.delete("/last-city", response_model=LastCityResponse)
async def clear_last_city(
    store: LastCityStore = Depends(get_last_city_store),
) -> LastCityResponse:
    await asyncio.to_thread(store.clear)
    return LastCityResponse(city=None)
