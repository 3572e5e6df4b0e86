from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from weatherapp.errors import WeatherError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: WeatherError

    @property
    def is_success(self) -> bool:
        return False


Result = Union[Success[T], Failure]
