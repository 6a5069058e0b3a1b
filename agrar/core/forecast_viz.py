"""
Forecast visualization.

Daily temperature range and precipitation for the forecast days, with the
optimal temperature band of a crop drawn behind when one crop is selected.
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from agrar.core.chart_config import apply_forecast_layout, get_standard_colors
from agrar.models.harvest import CropProfile


def create_forecast_chart(
    forecast_df: pd.DataFrame,
    profile: Optional[CropProfile] = None,
    title: Optional[str] = None,
) -> go.Figure:
    """
    Build the daily forecast chart.

    :param forecast_df: Output of forecast.forecast_to_df
    :param profile: Crop whose optimal temperature range is shaded
    :param title: Optional chart title
    :return: Plotly figure (empty figure when there is no data)
    """
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    if forecast_df.empty:
        return apply_forecast_layout(fig, title=title, showlegend=False)

    colors = get_standard_colors()

    fig.add_trace(
        go.Bar(
            x=forecast_df["date"],
            y=forecast_df["total_precip_mm"],
            name="Precipitation (mm)",
            marker_color=colors["rainfall_bar"],
            opacity=0.6,
            customdata=forecast_df["chance_of_rain"],
            hovertemplate="%{y:.1f} mm (%{customdata}% chance)<extra></extra>",
        ),
        secondary_y=True,
    )
    fig.add_trace(
        go.Scatter(
            x=forecast_df["date"],
            y=forecast_df["max_temp_c"],
            name="Max °C",
            mode="lines+markers",
            line=dict(color=colors["temp_max"]),
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=forecast_df["date"],
            y=forecast_df["min_temp_c"],
            name="Min °C",
            mode="lines+markers",
            line=dict(color=colors["temp_min"]),
            fill="tonexty",
            fillcolor=colors["temp_band"],
        ),
        secondary_y=False,
    )

    if profile is not None:
        fig.add_hrect(
            y0=profile.optimal_temp_min,
            y1=profile.optimal_temp_max,
            fillcolor=colors["optimal_band"],
            line_width=0,
            layer="below",
            annotation_text=f"{profile.display_name} optimum",
            annotation_position="top left",
        )

    fig.update_yaxes(title_text="Temperature (°C)", secondary_y=False, gridcolor="lightgray")
    fig.update_yaxes(
        title_text="Precipitation (mm)", secondary_y=True, showgrid=False, rangemode="tozero"
    )
    return apply_forecast_layout(fig, title=title)
