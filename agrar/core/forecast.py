"""
Tomorrow outlook.

Uses the gateway forecast when it covers the next day. Without one, a
synthetic estimate is derived from today's observation and flagged with
``synthetic=True`` so the UI and tests can tell the two apart.

The random source is injectable: anything with ``uniform(a, b)`` works,
``random.Random(seed)`` in tests.
"""

import random
from typing import Optional

import pandas as pd

from agrar.config import (
    FORECAST_LABEL,
    SYNTHETIC_HUMIDITY_OFFSET,
    SYNTHETIC_LABEL,
    SYNTHETIC_PRECIP_MM,
    SYNTHETIC_RAIN_CHANCE,
    SYNTHETIC_TEMP_SPREAD_C,
)
from agrar.models.harvest import TomorrowOutlook
from agrar.models.weather import ForecastDay, WeatherObservation, WeatherPayload
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)

# forecastday[0] is today in the gateway response
TOMORROW_INDEX = 1


def project_tomorrow(payload: WeatherPayload, rng=None) -> TomorrowOutlook:
    """
    Build tomorrow's outlook for a loaded payload.

    :param payload: Gateway payload with optional forecast
    :param rng: Random source with uniform(a, b); defaults to random.Random()
    :return: TomorrowOutlook
    """
    forecast = payload.forecast
    if forecast and len(forecast) > TOMORROW_INDEX:
        return _from_forecast(forecast[TOMORROW_INDEX], payload.current)

    logger.debug(
        f"No forecast for tomorrow at {payload.location.name}, synthesizing estimate"
    )
    return synthesize_tomorrow(payload.current, rng=rng)


def synthesize_tomorrow(current: WeatherObservation, rng=None) -> TomorrowOutlook:
    """
    Estimate tomorrow as "similar to today".

    :param current: Today's observation
    :param rng: Random source with uniform(a, b)
    :return: TomorrowOutlook flagged synthetic
    """
    rng = rng or random.Random()
    offset = rng.uniform(-SYNTHETIC_TEMP_SPREAD_C, SYNTHETIC_TEMP_SPREAD_C)

    return TomorrowOutlook(
        date=None,
        temperature_c=round(current.temperature_c + offset, 1),
        humidity_percent=min(100.0, current.humidity_percent + SYNTHETIC_HUMIDITY_OFFSET),
        chance_of_rain_percent=SYNTHETIC_RAIN_CHANCE,
        precipitation_mm=SYNTHETIC_PRECIP_MM,
        condition_text=current.condition_text,
        condition_icon=current.condition_icon,
        label=SYNTHETIC_LABEL,
        synthetic=True,
    )


def _from_forecast(day: ForecastDay, current: WeatherObservation) -> TomorrowOutlook:
    humidity: Optional[float] = day.avg_humidity_percent
    if humidity is None:
        humidity = current.humidity_percent

    return TomorrowOutlook(
        date=day.date,
        temperature_c=round((day.max_temp_c + day.min_temp_c) / 2, 1),
        humidity_percent=humidity,
        chance_of_rain_percent=day.chance_of_rain_percent,
        precipitation_mm=day.total_precip_mm,
        condition_text=day.condition_text,
        condition_icon=day.condition_icon,
        label=FORECAST_LABEL,
        synthetic=False,
    )


def forecast_to_df(payload: WeatherPayload) -> pd.DataFrame:
    """
    Flatten the forecast into a DataFrame for charts and tables.

    :param payload: Gateway payload
    :return: One row per forecast day, empty DataFrame when there is no forecast
    """
    if not payload.forecast:
        return pd.DataFrame()

    df = pd.DataFrame(
        [
            {
                "date": pd.Timestamp(day.date),
                "max_temp_c": day.max_temp_c,
                "min_temp_c": day.min_temp_c,
                "chance_of_rain": day.chance_of_rain_percent,
                "total_precip_mm": day.total_precip_mm,
                "avg_humidity": day.avg_humidity_percent,
                "condition": day.condition_text,
            }
            for day in payload.forecast
        ]
    )
    df.sort_values(by="date", inplace=True)
    df.reset_index(drop=True, inplace=True)
    return df
