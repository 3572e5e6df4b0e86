from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from weatherapp.state import WeatherViewModel


logger = logging.getLogger(__name__)


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class LocationProvider(Protocol):
    async def request_permission(self) -> PermissionStatus: ...

    async def get_current_location(self) -> Optional[Coordinates]: ...


class SingleShotLocation:
    """
    Awaitable bridge for callback-style location SDKs.

    Completes at most once: the first call to `complete`, `complete_empty` or `fail`
    wins and every later call is ignored. If the provider never calls back, `wait`
    never returns; timeouts belong to the provider.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[Optional[Coordinates]] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def complete(self, latitude: float, longitude: float) -> bool:
        return self._resolve(Coordinates(latitude=latitude, longitude=longitude))

    def complete_empty(self) -> bool:
        return self._resolve(None)

    def fail(self, exc: BaseException) -> bool:
        if self._future.done():
            logger.debug("ignoring late location failure: %s", exc)
            return False
        self._future.set_exception(exc)
        return True

    async def wait(self) -> Optional[Coordinates]:
        return await self._future

    def _resolve(self, value: Optional[Coordinates]) -> bool:
        if self._future.done():
            logger.debug("ignoring repeated location completion")
            return False
        self._future.set_result(value)
        return True


class CallbackLocationProvider:
    """
    LocationProvider over a callback-style SDK.

    `fetch_location` is handed a fresh SingleShotLocation per request and reports
    through it from whatever callback the SDK offers.
    """

    def __init__(
        self,
        *,
        has_permission: Callable[[], bool],
        fetch_location: Callable[[SingleShotLocation], None],
    ) -> None:
        self._has_permission = has_permission
        self._fetch_location = fetch_location

    async def request_permission(self) -> PermissionStatus:
        return PermissionStatus.GRANTED if self._has_permission() else PermissionStatus.DENIED

    async def get_current_location(self) -> Optional[Coordinates]:
        shot = SingleShotLocation()
        self._fetch_location(shot)
        return await shot.wait()


async def refresh_from_device_location(
    view_model: WeatherViewModel,
    provider: LocationProvider,
) -> None:
    status = await provider.request_permission()
    if status is not PermissionStatus.GRANTED:
        view_model.on_location_permission_denied()
        return

    # Location failures are dropped, the state machine has no kind for them.
    try:
        coordinates = await provider.get_current_location()
    except Exception:
        logger.warning("location fetch failed, keeping current state", exc_info=True)
        return

    if coordinates is None:
        logger.info("no location available, keeping current state")
        return

    await view_model.load_weather_by_location(coordinates.latitude, coordinates.longitude)
