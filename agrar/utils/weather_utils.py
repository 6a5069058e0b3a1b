"""
Weather utility functions for formatting.

This module provides reusable weather-related formatting functions that can
be used across the application.
"""


def format_value(value: float) -> str:
    """
    Format a measurement without trailing zeros (30.0 -> "30", 30.5 -> "30.5").

    :param value: Numeric measurement
    :return: Compact string
    """
    return f"{value:g}"


def classify_uv_level(uv_index: float) -> str:
    """
    Classify UV index into human-readable levels.

    :param uv_index: UV index value
    :return: UV level string (Low, Moderate, High, Very High)
    """
    if uv_index is None:
        return "n/a"
    if uv_index >= 8:
        return "Very High"
    elif uv_index >= 6:
        return "High"
    elif uv_index >= 3:
        return "Moderate"
    else:
        return "Low"


def icon_url(icon_ref: str) -> str:
    """
    Turn the gateway's protocol-relative icon reference into a usable URL.

    :param icon_ref: e.g. "//cdn.weatherapi.com/weather/64x64/day/113.png"
    :return: Absolute https URL, or empty string when no icon is known
    """
    if not icon_ref:
        return ""
    if icon_ref.startswith("//"):
        return f"https:{icon_ref}"
    return icon_ref


def get_human_readable_duration(recent_ms: int, older_ms: int) -> str:
    """
    Returns a human-centric duration in minutes, hours, or days.

    :param recent_ms: The later timestamp in ms.
    :param older_ms: The earlier timestamp in ms.
    :return: A human-readable duration.
    """
    age_minutes = (recent_ms - older_ms) / 60000

    if age_minutes < 60:
        return f"{age_minutes:.0f} minutes"
    elif age_minutes < 1440:
        return f"{age_minutes / 60:.1f} hours"
    else:
        return f"{age_minutes / 1440:.1f} days"
