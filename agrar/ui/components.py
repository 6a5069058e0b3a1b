"""
Reusable UI components for the Agrar dashboard.

Sidebar controls and the dismissible error notice.
"""

from typing import Optional

import streamlit as st

from agrar.config import ALL_CROPS, COUNTRY_NAMES
from agrar.core import crops
from agrar.core.dashboard import DashboardContext, Gateway, dismiss_error, refresh_weather


def crop_options() -> list:
    """Selector values: the all-crops sentinel followed by every crop id."""
    return [ALL_CROPS] + [profile.id for profile in crops.all_profiles()]


def format_crop_option(option: str) -> str:
    if option == ALL_CROPS:
        return "All crops"
    profile = crops.lookup(option)
    return f"{profile.icon} {profile.display_name}" if profile else option


def render_location_input(ctx: DashboardContext, key_prefix: str = "location") -> tuple:
    """
    Render the location form in the sidebar.

    :param ctx: Dashboard context, used for the current values
    :param key_prefix: Prefix for streamlit widget keys
    :return: Tuple of (raw input, country code) when submitted, else (None, None)
    """
    countries = list(COUNTRY_NAMES)
    with st.sidebar.form(f"{key_prefix}_form"):
        raw = st.text_input(
            "City or postal code",
            value=ctx.location.label,
            key=f"{key_prefix}_text",
        )
        country = st.selectbox(
            "Country",
            options=countries,
            index=countries.index(ctx.country) if ctx.country in countries else 0,
            format_func=lambda code: COUNTRY_NAMES[code],
            key=f"{key_prefix}_country",
        )
        submitted = st.form_submit_button("Show weather")

    if submitted:
        return raw, country
    return None, None


def render_crop_selector(ctx: DashboardContext, key: str = "crop_selection") -> str:
    """
    Render the crop selector in the sidebar.

    :param ctx: Dashboard context
    :param key: Streamlit widget key
    :return: Selected crop id or ALL_CROPS
    """
    options = crop_options()
    index = options.index(ctx.crop_selection) if ctx.crop_selection in options else 0
    return st.sidebar.selectbox(
        "Crop",
        options=options,
        index=index,
        format_func=format_crop_option,
        key=key,
    )


def render_error_notice(ctx: DashboardContext) -> Optional[str]:
    """Show the user-facing error with a dismiss button."""
    if not ctx.error_message:
        return None
    col1, col2 = st.columns([6, 1])
    with col1:
        st.error(ctx.error_message)
    with col2:
        if st.button("Dismiss", key="dismiss_error"):
            dismiss_error(ctx)
            st.rerun()
    return ctx.error_message


def render_refresh_button(ctx: DashboardContext, gateway: Gateway) -> bool:
    """
    Sidebar button for a manual, cache-bypassing refresh.

    Failures are reported only through ``ctx.error_message``.

    :param ctx: Dashboard context
    :param gateway: Weather gateway callable
    :return: True when the refresh succeeded
    """
    if not st.sidebar.button("🔄 Refresh Data"):
        return False
    if refresh_weather(ctx, gateway, force=True) is None:
        return False
    st.sidebar.success("Data refreshed!")
    return True
