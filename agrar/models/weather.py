"""
Weather data models and type definitions.

This module provides type-safe data structures for the weather gateway
payload and the cache entry, plus the conversion to and from the
gateway-response subset that is persisted in the cache.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from agrar.utils.date_util import to_date


@dataclass(frozen=True)
class LocationInfo:
    """Resolved location as reported by the gateway."""

    name: str
    country: str = ""
    region: str = ""
    localtime: str = ""


@dataclass(frozen=True)
class WeatherObservation:
    """Point-in-time current conditions."""

    temperature_c: float
    humidity_percent: float
    precipitation_mm: float
    wind_kph: float
    condition_text: str = ""
    condition_icon: str = ""
    uv_index: Optional[float] = None


@dataclass(frozen=True)
class ForecastDay:
    """One day of the multi-day forecast."""

    date: date
    max_temp_c: float
    min_temp_c: float
    chance_of_rain_percent: int
    total_precip_mm: float
    condition_text: str = ""
    condition_icon: str = ""
    avg_humidity_percent: Optional[float] = None

    def __post_init__(self):
        if self.min_temp_c > self.max_temp_c:
            raise ValueError(
                f"min_temp_c {self.min_temp_c} exceeds max_temp_c {self.max_temp_c}"
            )
        if not 0 <= self.chance_of_rain_percent <= 100:
            raise ValueError(
                f"chance_of_rain_percent out of range: {self.chance_of_rain_percent}"
            )
        if self.total_precip_mm < 0:
            raise ValueError(f"total_precip_mm is negative: {self.total_precip_mm}")


@dataclass(frozen=True)
class WeatherPayload:
    """Complete gateway result: location, current conditions, optional forecast."""

    location: LocationInfo
    current: WeatherObservation
    forecast: Optional[Tuple[ForecastDay, ...]] = None

    def to_dict(self) -> dict:
        """
        Serialize into the gateway-response subset stored in the cache.

        :return: dict shaped like the gateway JSON.
        """
        data = {
            "location": {
                "name": self.location.name,
                "country": self.location.country,
                "region": self.location.region,
                "localtime": self.location.localtime,
            },
            "current": {
                "temp_c": self.current.temperature_c,
                "humidity": self.current.humidity_percent,
                "precip_mm": self.current.precipitation_mm,
                "wind_kph": self.current.wind_kph,
                "uv": self.current.uv_index,
                "condition": {
                    "text": self.current.condition_text,
                    "icon": self.current.condition_icon,
                },
            },
        }
        if self.forecast is not None:
            data["forecast"] = {
                "forecastday": [
                    {
                        "date": day.date.isoformat(),
                        "day": {
                            "maxtemp_c": day.max_temp_c,
                            "mintemp_c": day.min_temp_c,
                            "daily_chance_of_rain": day.chance_of_rain_percent,
                            "totalprecip_mm": day.total_precip_mm,
                            "avghumidity": day.avg_humidity_percent,
                            "condition": {
                                "text": day.condition_text,
                                "icon": day.condition_icon,
                            },
                        },
                    }
                    for day in self.forecast
                ]
            }
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherPayload":
        """
        Build a payload from a gateway-shaped dict.

        Raises KeyError, TypeError or ValueError when required fields are
        missing, not convertible or not finite; callers translate these
        into their own error type.

        :param data: Gateway JSON (or the cached subset of it).
        :return: WeatherPayload
        """
        location = data["location"]
        current = data["current"]
        condition = current.get("condition") or {}

        observation = WeatherObservation(
            temperature_c=_finite_float(current["temp_c"]),
            humidity_percent=_finite_float(current["humidity"]),
            precipitation_mm=_finite_float(current.get("precip_mm") or 0.0),
            wind_kph=_finite_float(current.get("wind_kph") or 0.0),
            condition_text=condition.get("text", ""),
            condition_icon=condition.get("icon", ""),
            uv_index=_optional_float(current.get("uv")),
        )

        forecast = None
        forecast_block = data.get("forecast")
        if forecast_block and forecast_block.get("forecastday"):
            forecast = tuple(
                _forecast_day_from_dict(entry)
                for entry in forecast_block["forecastday"]
            )

        return cls(
            location=LocationInfo(
                name=str(location["name"]),
                country=str(location.get("country", "")),
                region=str(location.get("region", "")),
                localtime=str(location.get("localtime", "")),
            ),
            current=observation,
            forecast=forecast,
        )


@dataclass(frozen=True)
class CachedWeatherEntry:
    """Single cache slot: payload plus the key and time it was fetched for."""

    location_key: str
    payload: WeatherPayload
    fetched_at_ms: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.fetched_at_ms

    def is_valid(self, location_key: str, ttl_ms: int, now_ms: int) -> bool:
        """Valid only for the same key and while 0 <= age < ttl."""
        if location_key != self.location_key:
            return False
        age = self.age_ms(now_ms)
        return 0 <= age < ttl_ms


def _finite_float(value) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    return _finite_float(value)


def _forecast_day_from_dict(entry: dict) -> ForecastDay:
    day = entry["day"]
    condition = day.get("condition") or {}
    return ForecastDay(
        date=to_date(entry["date"]).date(),
        max_temp_c=_finite_float(day["maxtemp_c"]),
        min_temp_c=_finite_float(day["mintemp_c"]),
        chance_of_rain_percent=int(_finite_float(day.get("daily_chance_of_rain") or 0)),
        total_precip_mm=_finite_float(day.get("totalprecip_mm") or 0.0),
        condition_text=condition.get("text", ""),
        condition_icon=condition.get("icon", ""),
        avg_humidity_percent=_optional_float(day.get("avghumidity")),
    )
