from __future__ import annotations

from weatherapp.errors import data_parsing_error
from weatherapp.schemas import Weather, WeatherDto

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"


def build_icon_url(icon: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon)


def map_weather(dto: WeatherDto) -> Weather:
    # Only the first condition is shown.
    if not dto.weather:
        raise data_parsing_error()

    info = dto.weather[0]
    return Weather(
        city=dto.name,
        temperature=dto.main.temp,
        description=info.description,
        icon_url=build_icon_url(info.icon),
    )
