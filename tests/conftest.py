"""
Shared fixtures: gateway responses, crop profiles and a controllable clock.
"""

import copy

import pytest

from agrar.api.weather_client import parse_gateway_response
from agrar.models.harvest import CropProfile
from agrar.models.weather import WeatherObservation

GATEWAY_RESPONSE = {
    "location": {
        "name": "Berlin",
        "country": "Germany",
        "region": "Berlin",
        "localtime": "2025-07-14 13:45",
    },
    "current": {
        "temp_c": 24.0,
        "condition": {
            "text": "Sunny",
            "icon": "//cdn.weatherapi.com/weather/64x64/day/113.png",
        },
        "humidity": 55,
        "wind_kph": 12.2,
        "precip_mm": 1.0,
        "uv": 6.0,
    },
    "forecast": {
        "forecastday": [
            {
                "date": "2025-07-14",
                "day": {
                    "maxtemp_c": 27.0,
                    "mintemp_c": 15.0,
                    "condition": {"text": "Sunny", "icon": "//cdn/113.png"},
                    "daily_chance_of_rain": 0,
                    "totalprecip_mm": 0.0,
                    "avghumidity": 50,
                },
            },
            {
                "date": "2025-07-15",
                "day": {
                    "maxtemp_c": 28.0,
                    "mintemp_c": 18.0,
                    "condition": {"text": "Patchy rain nearby", "icon": "//cdn/176.png"},
                    "daily_chance_of_rain": 70,
                    "totalprecip_mm": 3.4,
                    "avghumidity": 66,
                },
            },
            {
                "date": "2025-07-16",
                "day": {
                    "maxtemp_c": 22.5,
                    "mintemp_c": 14.1,
                    "condition": {"text": "Moderate rain", "icon": "//cdn/302.png"},
                    "daily_chance_of_rain": 89,
                    "totalprecip_mm": 9.8,
                    "avghumidity": 84,
                },
            },
        ]
    },
}


class FakeClock:
    """Epoch-ms clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_752_500_000_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def gateway_response():
    return copy.deepcopy(GATEWAY_RESPONSE)


@pytest.fixture
def gateway_response_no_forecast():
    data = copy.deepcopy(GATEWAY_RESPONSE)
    del data["forecast"]
    return data


@pytest.fixture
def payload(gateway_response):
    return parse_gateway_response(gateway_response)


@pytest.fixture
def payload_no_forecast(gateway_response_no_forecast):
    return parse_gateway_response(gateway_response_no_forecast)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def weizen():
    return CropProfile(
        id="weizen",
        display_name="Weizen",
        icon="🌾",
        comment="test",
        optimal_humidity_max=60,
        optimal_temp_min=22,
        optimal_temp_max=26,
        optimal_precip_max=5,
    )


def observation(temp=24.0, humidity=55.0, precip=1.0, wind=10.0):
    return WeatherObservation(
        temperature_c=temp,
        humidity_percent=humidity,
        precipitation_mm=precip,
        wind_kph=wind,
        condition_text="Sunny",
        condition_icon="//cdn/113.png",
    )


@pytest.fixture
def make_observation():
    return observation
