from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    CITY_NOT_FOUND = "city_not_found"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    DATA_PARSING_ERROR = "data_parsing_error"
    PERMISSION_DENIED = "permission_denied"
    GENERIC_API_ERROR = "generic_api_error"


@dataclass(frozen=True)
class WeatherError(Exception):
    kind: ErrorKind
    message: str
    code: int | None = None

    def __str__(self) -> str:
        return self.message


_STATUS_ERRORS: dict[int, tuple[ErrorKind, str]] = {
    401: (ErrorKind.UNAUTHORIZED, "Invalid API key"),
    404: (ErrorKind.CITY_NOT_FOUND, "Location not found"),
    429: (ErrorKind.RATE_LIMIT_EXCEEDED, "Too many requests. Please try again later."),
    500: (ErrorKind.SERVER_ERROR, "Server error. Please try again later."),
    502: (ErrorKind.SERVER_ERROR, "Server error. Please try again later."),
    503: (ErrorKind.SERVER_ERROR, "Server error. Please try again later."),
}


def data_parsing_error() -> WeatherError:
    return WeatherError(kind=ErrorKind.DATA_PARSING_ERROR, message="No weather data available")


def permission_denied_error() -> WeatherError:
    return WeatherError(
        kind=ErrorKind.PERMISSION_DENIED,
        message="Location permission is required to fetch weather",
    )


def error_from_status(status_code: int, reason: str = "") -> WeatherError:
    known = _STATUS_ERRORS.get(status_code)
    if known is not None:
        kind, message = known
        return WeatherError(kind=kind, message=message, code=status_code)

    return WeatherError(
        kind=ErrorKind.GENERIC_API_ERROR,
        message=f"API error: {reason or status_code}",
        code=status_code,
    )


def classify_error(exc: BaseException) -> WeatherError:
    """
    Map any failure raised while fetching weather onto the closed ErrorKind set.
    Never raises; unknown failures become GENERIC_API_ERROR.
    """
    if isinstance(exc, WeatherError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return error_from_status(response.status_code, response.reason_phrase)

    if isinstance(exc, httpx.TransportError):
        return WeatherError(
            kind=ErrorKind.NETWORK_ERROR,
            message="Network error. Please check your connection.",
        )

    return WeatherError(
        kind=ErrorKind.GENERIC_API_ERROR,
        message=f"Unexpected error: {exc}",
    )
