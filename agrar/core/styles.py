"""
Centralized style management for dashboard components.

This module provides the CSS for the weather header and the crop cards and
small HTML builders, so components share one look.
"""

from dataclasses import dataclass
from html import escape
from typing import Dict, Optional

import streamlit as st

from agrar.models.harvest import HarvestTier
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)


@dataclass
class StyleConfig:
    """Configuration dataclass for style parameters."""

    # Weather header styles
    header_font_size: str = "0.9rem"
    header_line_height: str = "1.2"
    metric_spacing: str = "0.5rem"
    separator_margin: str = "0.3rem"

    # Colors
    text_color: str = "#262730"
    separator_color: str = "#666666"
    current_conditions_bg: str = "#f8f9fa"
    current_conditions_border: str = "#e9ecef"
    ready_bg: str = "#e6f4ea"
    ready_border: str = "#34a853"
    acceptable_bg: str = "#fff3cd"
    acceptable_border: str = "#f0ad4e"
    problematic_bg: str = "#fdecea"
    problematic_border: str = "#d93025"

    mobile_breakpoint: str = "768px"


class StyleManager:
    """
    Centralized style management with singleton pattern.

    Usage:
        style_manager = get_style_manager()
        style_manager.inject_styles()  # Call once per rerun
        style_manager.render_current_conditions(html_content)

    CSS Classes:
        - .current-conditions: Container for current weather metrics
        - .weather-metrics-line: Flex container for metric groups
        - .metric-group: Individual metric with emoji and value
        - .metric-separator: Visual separator between metrics
        - .crop-card, .tier-ready, .tier-acceptable, .tier-problematic
    """

    _instance: Optional["StyleManager"] = None

    def __new__(cls) -> "StyleManager":
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize StyleManager with default configuration."""
        if not hasattr(self, "_config"):
            self._config = StyleConfig()

    @property
    def config(self) -> StyleConfig:
        """Get current style configuration."""
        return self._config

    def inject_styles(self) -> None:
        """Inject global CSS styles, ensuring they're always available."""
        css = self._generate_css()
        st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
        logger.debug("CSS styles injected/reinjected")

    def tier_colors(self) -> Dict[HarvestTier, tuple]:
        """Background and border color per harvest tier."""
        c = self.config
        return {
            HarvestTier.READY: (c.ready_bg, c.ready_border),
            HarvestTier.ACCEPTABLE: (c.acceptable_bg, c.acceptable_border),
            HarvestTier.PROBLEMATIC: (c.problematic_bg, c.problematic_border),
        }

    def _generate_css(self) -> str:
        """Generate CSS rules from configuration."""
        tier_rules = "".join(
            f"""
        .tier-{tier.value} {{
            background-color: {bg};
            border-left: 4px solid {border};
        }}
        """
            for tier, (bg, border) in self.tier_colors().items()
        )
        return f"""
        .metric-group {{
            display: flex;
            align-items: center;
            gap: 0.2rem;
            white-space: nowrap;
        }}

        .metric-separator {{
            color: {self.config.separator_color};
            margin: 0 {self.config.separator_margin};
            font-weight: 500;
        }}

        .current-conditions {{
            background-color: {self.config.current_conditions_bg};
            border: 1px solid {self.config.current_conditions_border};
            border-radius: 6px;
            padding: 0.5rem 0.75rem;
            margin: 0.5rem 0;
            font-size: {self.config.header_font_size};
            line-height: {self.config.header_line_height};
            color: {self.config.text_color};
        }}

        .weather-metrics-line {{
            margin: 0.25rem 0;
            display: flex;
            flex-wrap: wrap;
            align-items: center;
            gap: {self.config.metric_spacing};
        }}

        .crop-card {{
            border-radius: 6px;
            padding: 0.6rem 0.8rem;
            margin: 0.4rem 0;
            font-size: 0.9rem;
            line-height: 1.3;
        }}

        .crop-card .crop-title {{
            font-weight: 600;
            font-size: 1.0rem;
        }}

        .crop-card .crop-comment {{
            color: {self.config.separator_color};
            font-size: 0.8rem;
        }}
        {tier_rules}
        @media (max-width: {self.config.mobile_breakpoint}) {{
            .current-conditions, .crop-card {{
                font-size: 0.75rem;
                padding: 0.4rem 0.6rem;
            }}

            .metric-separator {{
                display: none;
            }}
        }}
        """

    def render_current_conditions(self, html_content: str) -> None:
        """
        Render current conditions with proper styling.

        :param html_content: HTML content for current conditions
        """
        wrapped_html = f'<div class="current-conditions">{html_content}</div>'
        st.markdown(wrapped_html, unsafe_allow_html=True)

    def build_metric_group(self, emoji: str, value: str, unit: str = "") -> str:
        """
        Build HTML for a metric group with emoji and value.

        :param emoji: Emoji icon for the metric
        :param value: Metric value
        :param unit: Optional unit string
        :return: HTML string for the metric group
        """
        parts = [emoji]
        if value:
            parts.append(escape(value))
        if unit:
            parts.append(unit)

        content = " ".join(parts)
        return f'<span class="metric-group">{content}</span>'

    def build_separator(self) -> str:
        return '<span class="metric-separator"> • </span>'

    def build_metrics_line(self, metric_groups: list[str]) -> str:
        """
        Build HTML for a line of weather metrics.

        :param metric_groups: List of metric group HTML strings
        :return: HTML string for the metrics line
        """
        if not metric_groups:
            return ""
        content = self.build_separator().join(metric_groups)
        return f'<div class="weather-metrics-line">{content}</div>'

    def build_crop_card(
        self, tier: HarvestTier, title: str, lines: list[str], comment: str = ""
    ) -> str:
        """
        Build HTML for one crop card, colored by harvest tier.

        :param tier: Harvest tier of today's evaluation
        :param title: Crop icon and name
        :param lines: Text lines below the title
        :param comment: Optional agronomic note
        :return: HTML string for the card
        """
        body = "".join(f"<div>{escape(line)}</div>" for line in lines)
        note = f'<div class="crop-comment">{escape(comment)}</div>' if comment else ""
        return (
            f'<div class="crop-card tier-{tier.value}">'
            f'<div class="crop-title">{escape(title)}</div>'
            f"{body}{note}</div>"
        )


def get_style_manager() -> StyleManager:
    """
    Get the singleton StyleManager instance.

    :return: StyleManager instance
    """
    return StyleManager()
