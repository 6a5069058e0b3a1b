"""
Location normalization.

Turns free-form user input into the query string sent to the weather gateway
and the key used by the location cache. Postal codes are resolved through the
static tables in agrar.config; there is no other geocoding.

Accepted inputs:
- city name: "Berlin"
- postal code for the selected country: "10115", "1010"
- city with country: "Linz, AT" or "Linz, Austria"
"""

import re
from dataclasses import dataclass
from typing import Optional

from agrar.config import (
    COUNTRY_NAMES,
    DEFAULT_COUNTRY,
    DEFAULT_LOCATION,
    POSTAL_CODE_PATTERNS,
    POSTAL_CODE_TABLE,
)
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)


@dataclass(frozen=True)
class NormalizedLocation:
    query: str
    key: str
    label: str


def country_name(country: Optional[str]) -> str:
    """
    Expand a country code to the name the gateway understands.

    Unknown codes and full names are passed through unchanged.
    """
    if not country:
        return COUNTRY_NAMES[DEFAULT_COUNTRY]
    country = country.strip()
    return COUNTRY_NAMES.get(country.upper(), country)


def is_postal_code(text: str, country: str) -> bool:
    pattern = POSTAL_CODE_PATTERNS.get(country.upper())
    return bool(pattern and re.match(pattern, text))


def make_location_key(query: str) -> str:
    """Cache key for a gateway query; case and spacing do not matter."""
    return " ".join(query.split()).casefold()


def normalize_location(raw: Optional[str], country: Optional[str] = None) -> NormalizedLocation:
    """
    Normalize user input into a gateway query and a cache key.

    :param raw: City, postal code or "city, country"; blank means the default location
    :param country: Selected country code (DE, AT, CH) or name
    :return: NormalizedLocation
    """
    text = " ".join((raw or "").split())
    country_code = (country or DEFAULT_COUNTRY).strip().upper()

    if not text:
        text = DEFAULT_LOCATION

    if "," in text:
        city, _, country_part = text.partition(",")
        city = city.strip()
        country_part = country_part.strip()
        if city and country_part:
            query = f"{city}, {country_name(country_part)}"
            return NormalizedLocation(query=query, key=make_location_key(query), label=city)
        text = city or country_part

    if is_postal_code(text, country_code):
        city = POSTAL_CODE_TABLE.get((country_code, text))
        if city:
            query = f"{city}, {country_name(country_code)}"
            label = f"{city} ({text})"
        else:
            logger.debug(f"Postal code {text} not in lookup table, querying as-is")
            query = f"{text}, {country_name(country_code)}"
            label = text
        return NormalizedLocation(query=query, key=make_location_key(query), label=label)

    query = f"{text}, {country_name(country_code)}"
    return NormalizedLocation(query=query, key=make_location_key(query), label=text)
