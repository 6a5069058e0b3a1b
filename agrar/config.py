# config.py
"""
Configurations for the Agrar weather dashboard application.

This module holds the crop threshold data, the postal code and country lookup
tables, and the timing constants shared across the application, together with
a small helper for reading secrets.
"""

import os
from types import MappingProxyType

import streamlit as st

# Cache and refresh timing (milliseconds)
CACHE_TTL_MS = 10 * 60 * 1000
AUTO_REFRESH_MS = 600_000

# Weather gateway
WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"
WEATHER_API_KEY_NAME = "WEATHER_API_KEY"
REQUEST_TIMEOUT_S = 10
FORECAST_DAYS = 7

DEFAULT_LOCATION = "Berlin"
DEFAULT_COUNTRY = "DE"
CACHE_STORAGE_KEY = "weatherData"

# Synthetic "tomorrow" estimate when the gateway sends no forecast
SYNTHETIC_TEMP_SPREAD_C = 2.0
SYNTHETIC_HUMIDITY_OFFSET = 5.0
SYNTHETIC_RAIN_CHANCE = 20
SYNTHETIC_PRECIP_MM = 0.0
SYNTHETIC_LABEL = "similar to today"
FORECAST_LABEL = "forecast"

ALL_CROPS = "all"

crop_index = {
    "weizen": {
        "name": "Weizen",
        "icon": "🌾",
        "comment": "Winter wheat, harvest when grain is hard and dry.",
        "humidity_max": 60,
        "temp_min": 22,
        "temp_max": 26,
        "precip_max": 5,
    },
    "gerste": {
        "name": "Gerste",
        "icon": "🌾",
        "comment": "Barley ripens early; avoid threshing after dew.",
        "humidity_max": 65,
        "temp_min": 18,
        "temp_max": 28,
        "precip_max": 4,
    },
    "raps": {
        "name": "Raps",
        "icon": "🌼",
        "comment": "Rapeseed pods shatter in heat, harvest on mild dry days.",
        "humidity_max": 70,
        "temp_min": 15,
        "temp_max": 25,
        "precip_max": 3,
    },
    "mais": {
        "name": "Mais",
        "icon": "🌽",
        "comment": "Grain maize tolerates humidity better than small grains.",
        "humidity_max": 75,
        "temp_min": 10,
        "temp_max": 30,
        "precip_max": 8,
    },
    "kartoffeln": {
        "name": "Kartoffeln",
        "icon": "🥔",
        "comment": "Lift potatoes from dry soil to limit bruising and rot.",
        "humidity_max": 80,
        "temp_min": 8,
        "temp_max": 25,
        "precip_max": 6,
    },
    "zuckerrueben": {
        "name": "Zuckerrüben",
        "icon": "🍠",
        "comment": "Sugar beet lifting avoids frost and waterlogged fields.",
        "humidity_max": 85,
        "temp_min": 5,
        "temp_max": 20,
        "precip_max": 10,
    },
}

# Country code -> name used in "city, country" gateway queries
COUNTRY_NAMES = MappingProxyType(
    {
        "DE": "Germany",
        "AT": "Austria",
        "CH": "Switzerland",
    }
)

# Postal code formats per country
POSTAL_CODE_PATTERNS = MappingProxyType(
    {
        "DE": r"^\d{5}$",
        "AT": r"^\d{4}$",
        "CH": r"^\d{4}$",
    }
)

# (country code, postal code) -> city
POSTAL_CODE_TABLE = MappingProxyType(
    {
        ("DE", "10115"): "Berlin",
        ("DE", "20095"): "Hamburg",
        ("DE", "80331"): "Munich",
        ("DE", "50667"): "Cologne",
        ("DE", "60311"): "Frankfurt",
        ("DE", "70173"): "Stuttgart",
        ("DE", "04109"): "Leipzig",
        ("DE", "30159"): "Hannover",
        ("DE", "01067"): "Dresden",
        ("DE", "18055"): "Rostock",
        ("DE", "24103"): "Kiel",
        ("DE", "90402"): "Nuremberg",
        ("AT", "1010"): "Vienna",
        ("AT", "4020"): "Linz",
        ("AT", "8010"): "Graz",
        ("CH", "8001"): "Zurich",
        ("CH", "3011"): "Bern",
        ("CH", "4051"): "Basel",
    }
)


def get_secret(name: str, default=None):
    """
    Read a secret from the environment, then from Streamlit secrets.

    :param name: Secret name, e.g. WEATHER_API_KEY.
    :param default: Value returned when the secret is not configured.
    :return: The secret value or default.
    """
    value = os.getenv(name)
    if value:
        return value
    try:
        return st.secrets[name]
    except Exception:
        # st.secrets raises when no secrets.toml exists
        return default
