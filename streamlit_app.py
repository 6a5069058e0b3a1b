"""
Main streamlit.io application
"""

import streamlit as st

from agrar.api.weather_client import fetch_weather
from agrar.config import AUTO_REFRESH_MS
from agrar.core import crops
from agrar.core.dashboard import (
    DashboardContext,
    build_crop_reports,
    change_location,
    needs_auto_refresh,
    refresh_weather,
    tomorrow_outlook,
)
from agrar.core.location_cache import LocationCache
from agrar.core.styles import get_style_manager
from agrar.ui import components, forecast, harvest, header
from agrar.utils.date_util import format_ts_utc, now_ms
from agrar.utils.log_util import app_logger
from agrar.utils.weather_utils import get_human_readable_duration

logger = app_logger(__name__)

st.set_page_config(
    page_title="Agrar Dashboard",
    page_icon="🌾",
    layout="wide",
    initial_sidebar_state="expanded",
)

style_manager = get_style_manager()
style_manager.inject_styles()


def get_context() -> DashboardContext:
    """One dashboard context per browser session, cache kept in session state."""
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardContext(
            cache=LocationCache(st.session_state)
        )
        logger.info("New dashboard session")
    return st.session_state["dashboard"]


ctx = get_context()

# Sidebar controls ########################

st.sidebar.title("🌾 Agrar Dashboard")

raw_location, country = components.render_location_input(ctx)
if raw_location is not None:
    change_location(ctx, raw_location, country)

ctx.crop_selection = components.render_crop_selector(ctx)

auto_update = st.sidebar.checkbox("Auto-Update", value=True)

components.render_refresh_button(ctx, fetch_weather)


# Present the dashboard ########################


@st.fragment(run_every=AUTO_REFRESH_MS / 1000 if auto_update else None)
def render_dashboard() -> None:
    current_time = now_ms()
    if needs_auto_refresh(ctx, current_time, auto_update):
        with st.spinner("Loading weather data..."):
            refresh_weather(ctx, fetch_weather)

    components.render_error_notice(ctx)

    if not ctx.has_data:
        st.info(f"No weather data for {ctx.location.label} yet.")
        return

    if ctx.last_refresh_ms is not None:
        age = get_human_readable_duration(current_time, ctx.last_refresh_ms)
        st.caption(
            f"Last refresh: {age} ago ({format_ts_utc(ctx.last_refresh_ms)})"
        )

    header.render_weather_header(ctx.payload)

    outlook = tomorrow_outlook(ctx)
    selected_profile = crops.lookup(ctx.crop_selection)

    tab_harvest, tab_forecast = st.tabs(["Harvest", "Forecast"])
    with tab_harvest:
        harvest.render(lambda: build_crop_reports(ctx, outlook=outlook), outlook)
    with tab_forecast:
        forecast.render(ctx.payload, outlook, profile=selected_profile)


render_dashboard()
