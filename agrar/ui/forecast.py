"""
Forecast tab: tomorrow outlook and the daily forecast chart.
"""

from typing import Optional

import streamlit as st

from agrar.core.forecast import forecast_to_df
from agrar.core.forecast_viz import create_forecast_chart
from agrar.models.harvest import CropProfile, TomorrowOutlook
from agrar.models.weather import WeatherPayload
from agrar.utils.weather_utils import format_value, icon_url


def render_tomorrow(outlook: TomorrowOutlook) -> None:
    """Render tomorrow's outlook as metrics."""
    title = "Tomorrow"
    if outlook.date is not None:
        title += f", {outlook.date.strftime('%a %d.%m.')}"
    st.subheader(title)
    if outlook.synthetic:
        st.info("No forecast available, estimate " + outlook.label + ".")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Temperature", f"{format_value(outlook.temperature_c)}°C")
    col2.metric("Humidity", f"{format_value(outlook.humidity_percent)}%")
    col3.metric("Chance of rain", f"{outlook.chance_of_rain_percent}%")
    col4.metric("Precipitation", f"{format_value(outlook.precipitation_mm)} mm")

    url = icon_url(outlook.condition_icon)
    if url:
        st.image(url, width=48, caption=outlook.condition_text or None)


def render(
    payload: WeatherPayload, outlook: TomorrowOutlook, profile: Optional[CropProfile] = None
) -> None:
    """
    Render the forecast tab.

    :param payload: Loaded gateway payload
    :param outlook: Tomorrow outlook
    :param profile: Selected crop, shades its optimal temperature band
    """
    render_tomorrow(outlook)

    forecast_df = forecast_to_df(payload)
    if forecast_df.empty:
        st.caption("The weather service returned no multi-day forecast.")
        return

    st.subheader(f"{len(forecast_df)}-day forecast")
    st.plotly_chart(
        create_forecast_chart(forecast_df, profile=profile),
        use_container_width=True,
    )
    st.dataframe(
        forecast_df.rename(
            columns={
                "max_temp_c": "Max °C",
                "min_temp_c": "Min °C",
                "chance_of_rain": "Rain %",
                "total_precip_mm": "Precip mm",
                "avg_humidity": "Humidity %",
                "condition": "Condition",
            }
        ),
        hide_index=True,
    )
