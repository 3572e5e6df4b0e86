from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, List, Optional

from weatherapp.errors import WeatherError, permission_denied_error
from weatherapp.preferences import LastCityStore
from weatherapp.result import Result, Success
from weatherapp.schemas import Weather
from weatherapp.use_cases import GetWeatherByCity, GetWeatherByLocation


logger = logging.getLogger(__name__)

StateListener = Callable[["WeatherState"], None]


@dataclass(frozen=True)
class WeatherState:
    weather: Optional[Weather] = None
    is_loading: bool = False
    error: Optional[WeatherError] = None


class WeatherViewModel:
    """
    Single owner of the screen's WeatherState.

    The state is only replaced through the transition methods below. Overlapping
    fetches are not coordinated: whichever completes last writes the final state.
    """

    def __init__(
        self,
        *,
        get_weather_by_city: GetWeatherByCity,
        get_weather_by_location: GetWeatherByLocation,
        last_city_store: LastCityStore,
    ) -> None:
        self._get_weather_by_city = get_weather_by_city
        self._get_weather_by_location = get_weather_by_location
        self._last_city_store = last_city_store
        self._state = WeatherState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> WeatherState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def search_city(self, city: str) -> None:
        if not city.strip():
            return

        result = await self._load(lambda: self._get_weather_by_city(city))
        if isinstance(result, Success):
            try:
                await asyncio.to_thread(self._last_city_store.save, city)
            except OSError:
                logger.warning("could not remember last city=%s", city, exc_info=True)

    async def load_weather_by_location(self, latitude: float, longitude: float) -> None:
        await self._load(lambda: self._get_weather_by_location(latitude, longitude))

    async def load_last_searched_city(self) -> None:
        try:
            last_city = await asyncio.to_thread(self._last_city_store.load)
        except OSError:
            logger.warning("could not read last city", exc_info=True)
            return

        if last_city is not None:
            await self.search_city(last_city)

    def on_location_permission_denied(self) -> None:
        self._update(is_loading=False, error=permission_denied_error())

    def clear_error(self) -> None:
        self._update(error=None)

    async def _load(self, fetch: Callable[[], Awaitable[Result[Weather]]]) -> Result[Weather]:
        self._update(is_loading=True, error=None)

        result = await fetch()
        if isinstance(result, Success):
            self._update(weather=result.value, is_loading=False, error=None)
        else:
            self._update(weather=None, is_loading=False, error=result.error)
        return result

    def _update(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("state listener failed")
