"""
Header rendering module for the dashboard.

This module provides the location title and the current conditions line.
"""

import streamlit as st

from agrar.core.styles import get_style_manager
from agrar.models.weather import WeatherPayload
from agrar.utils.log_util import app_logger
from agrar.utils.weather_utils import classify_uv_level, format_value, icon_url

logger = app_logger(__name__)


def build_conditions_line(payload: WeatherPayload) -> str:
    """
    Build the HTML metrics line for the current observation.

    :param payload: Loaded gateway payload
    :return: HTML string
    """
    current = payload.current
    style_manager = get_style_manager()

    metrics = [
        style_manager.build_metric_group("🌡️", f"{format_value(current.temperature_c)}°C"),
        style_manager.build_metric_group("💧", f"{format_value(current.humidity_percent)}%"),
        style_manager.build_metric_group("💨", f"{format_value(current.wind_kph)} km/h"),
        style_manager.build_metric_group("🌧️", f"{format_value(current.precipitation_mm)} mm"),
    ]
    if current.uv_index is not None:
        metrics.append(
            style_manager.build_metric_group("☀️", f"UV {classify_uv_level(current.uv_index)}")
        )
    if current.condition_text:
        metrics.append(style_manager.build_metric_group("🌤️", current.condition_text))
    return style_manager.build_metrics_line(metrics)


def render_weather_header(payload: WeatherPayload) -> None:
    """
    Render the location title and current conditions.

    :param payload: Loaded gateway payload
    """
    location = payload.location
    header_col1, header_col2 = st.columns([1, 2])
    with header_col1:
        st.header(location.name)
        subtitle = ", ".join(part for part in (location.region, location.country) if part)
        if subtitle:
            st.caption(subtitle)
        if location.localtime:
            st.caption(f"Local time: {location.localtime}")
    with header_col2:
        try:
            url = icon_url(payload.current.condition_icon)
            if url:
                st.image(url, width=64)
            get_style_manager().render_current_conditions(build_conditions_line(payload))
        except Exception as e:
            logger.error(f"Error rendering current conditions: {e}")
            st.caption("Weather conditions temporarily unavailable")
