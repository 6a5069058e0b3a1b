"""
chart_config.py

Reusable Plotly configuration helpers for the forecast charts.
"""

from typing import Dict, Optional

import plotly.graph_objects as go


def get_default_margins(compact: bool = False) -> Dict[str, int]:
    """
    Get standard margin configurations for charts.

    :param compact: If True, returns reduced margins for overview displays
    :return: Dictionary with margin settings
    """
    if compact:
        return dict(l=30, r=20, t=30, b=40)
    else:
        return dict(l=50, r=20, t=40, b=40)


def get_standard_colors() -> Dict[str, str]:
    """
    Get standard color palette used across charts.

    :return: Dictionary with color definitions
    """
    return {
        "temp_max": "#FF6347",
        "temp_min": "#1f77b4",
        "temp_band": "rgba(255, 165, 0, 0.15)",
        "rainfall_bar": "#4682B4",
        "rain_chance": "#90A4AE",
        "optimal_band": "rgba(52, 168, 83, 0.12)",
    }


def apply_forecast_layout(
    fig: go.Figure,
    height: int = 380,
    title: Optional[str] = None,
    compact: bool = False,
    showlegend: bool = True,
) -> go.Figure:
    """
    Apply the standard daily forecast layout.

    :param fig: Plotly figure to configure
    :param height: Chart height in pixels
    :param title: Chart title (optional)
    :param compact: Use compact margins if True
    :param showlegend: Whether to show legend
    :return: Configured figure
    """
    layout_config = {
        "height": height,
        "margin": get_default_margins(compact),
        "showlegend": showlegend,
        "hovermode": "x unified",
        "template": "plotly_white",
        "legend": dict(orientation="h", yanchor="bottom", y=1.02, x=0),
    }

    if title:
        layout_config["title"] = title

    fig.update_layout(**layout_config)
    fig.update_xaxes(showgrid=False, tickformat="%a %d.%m.")
    return fig
