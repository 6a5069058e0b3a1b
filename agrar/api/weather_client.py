"""
weather_client.py: Lightweight interface to the WeatherAPI.com REST API
using direct requests.

Functions:
- fetch_weather(query, days)
- fetch_weather_raw(query, days)
- parse_gateway_response(data)

Requires:
- WEATHER_API_KEY in the environment or in Streamlit secrets
"""

from pprint import pprint
from typing import Optional

import requests

from agrar.config import (
    FORECAST_DAYS,
    REQUEST_TIMEOUT_S,
    WEATHER_API_BASE_URL,
    WEATHER_API_KEY_NAME,
    get_secret,
)
from agrar.core.exceptions import MalformedResponseError, TransportError
from agrar.models.weather import WeatherPayload
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)

REQUIRED_SECTIONS = ("location", "current")


def _error_detail(resp: requests.Response) -> str:
    """Extract the gateway's error message from a failed response, if any."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return ""


def fetch_weather_raw(
    query: str,
    days: int = FORECAST_DAYS,
    api_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> dict:
    """
    Fetch the raw forecast JSON for a location.

    :param query: Normalized location query, e.g. "Berlin, Germany".
    :param days: Number of forecast days (1-7 on the free plan).
    :param api_key: Overrides the configured WEATHER_API_KEY.
    :param session: Optional requests session.
    :return: Decoded JSON body.
    :raises TransportError: on network failure or non-success status.
    :raises MalformedResponseError: when the body is not JSON.
    """
    api_key = api_key or get_secret(WEATHER_API_KEY_NAME)
    if not api_key:
        raise TransportError(f"{WEATHER_API_KEY_NAME} is not configured")

    url = f"{WEATHER_API_BASE_URL.rstrip('/')}/forecast.json"
    params = {
        "key": api_key,
        "q": query,
        "days": days,
        "aqi": "no",
        "alerts": "no",
    }
    http = session or requests

    logger.info(f"Fetching weather: q={query!r}, days={days}")
    try:
        resp = http.get(url, params=params, timeout=REQUEST_TIMEOUT_S)
    except requests.RequestException as e:
        logger.error(f"Request error while fetching weather for {query!r}: {e}")
        raise TransportError(f"Weather service unreachable: {e}") from e

    if resp.status_code != 200:
        detail = _error_detail(resp)
        logger.error(f"Weather fetch failed: {resp.status_code} {detail}")
        raise TransportError(
            f"Weather service answered {resp.status_code}: {detail}".rstrip(": "),
            status_code=resp.status_code,
        )

    try:
        return resp.json()
    except (ValueError, RecursionError) as e:
        logger.error(f"Weather response is not JSON: {resp.text[:500]!r}")
        raise MalformedResponseError("Weather response is not JSON", resp.text) from e


def parse_gateway_response(data) -> WeatherPayload:
    """
    Validate and reshape a gateway response into a WeatherPayload.

    :param data: Decoded gateway JSON.
    :return: WeatherPayload, forecast is None when the gateway omitted it.
    :raises MalformedResponseError: when required sections or fields are missing.
    """
    if not isinstance(data, dict):
        logger.error(f"Malformed weather response (not an object): {data!r}")
        raise MalformedResponseError("Weather response is not an object", data)

    missing = [section for section in REQUIRED_SECTIONS if not data.get(section)]
    if missing:
        logger.error(f"Malformed weather response, missing {missing}: {data!r}")
        raise MalformedResponseError(
            f"Weather response missing {', '.join(missing)}", data
        )

    try:
        return WeatherPayload.from_dict(data)
    except (
        KeyError,
        TypeError,
        ValueError,
        AttributeError,
        OverflowError,
        RecursionError,
    ) as e:
        logger.error(f"Malformed weather response ({e}): {data!r}")
        raise MalformedResponseError(f"Weather response invalid: {e}", data) from e


def fetch_weather(
    query: str,
    days: int = FORECAST_DAYS,
    api_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> WeatherPayload:
    """
    Fetch and parse current conditions and forecast for a location.

    :param query: Normalized location query.
    :param days: Number of forecast days.
    :param api_key: Overrides the configured WEATHER_API_KEY.
    :param session: Optional requests session.
    :return: WeatherPayload
    """
    raw = fetch_weather_raw(query, days=days, api_key=api_key, session=session)
    payload = parse_gateway_response(raw)
    logger.debug(
        f"Weather for {payload.location.name}: {payload.current.temperature_c}°C, "
        f"{len(payload.forecast or ())} forecast days"
    )
    return payload


def main():
    payload = fetch_weather("Berlin, Germany", days=3)
    print("✅ Location:")
    pprint(payload.location)
    print("✅ Current:")
    pprint(payload.current)
    for day in payload.forecast or ():
        pprint(day)


if __name__ == "__main__":
    main()
