"""
Harvest recommendation cards.

One card per selected crop, colored by today's harvest tier, with the
recommendation and tomorrow's tier.
"""

from typing import List

import streamlit as st

from agrar.core.exceptions import InternalInconsistencyError
from agrar.core.styles import get_style_manager
from agrar.models.harvest import CropReport, HarvestStatus, HarvestTier, TomorrowOutlook
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)

TIER_LABELS = {
    HarvestTier.READY: "✅ Ready",
    HarvestTier.ACCEPTABLE: "⚠️ Acceptable",
    HarvestTier.PROBLEMATIC: "⛔ Problematic",
}

CARDS_PER_ROW = 3


def describe_tomorrow(status: HarvestStatus, outlook: TomorrowOutlook) -> str:
    """One line summary of tomorrow's tier and where the numbers come from."""
    text = f"Tomorrow ({outlook.label}): {TIER_LABELS[status.tier]}"
    if status.reasons:
        text += f" ({status.reasons[0]})"
    return text


def card_lines(report: CropReport, outlook: TomorrowOutlook) -> List[str]:
    """
    Text lines shown on a crop card.

    :param report: Evaluated crop report
    :param outlook: Tomorrow outlook used for report.tomorrow_status
    :return: list of lines
    """
    profile = report.profile
    lines = [
        f"{TIER_LABELS[report.status.tier]}: {report.recommendation.when_label}",
        report.recommendation.reason_text,
        (
            f"Optimum: {profile.optimal_temp_min:g}–{profile.optimal_temp_max:g}°C, "
            f"humidity ≤ {profile.optimal_humidity_max:g}%, "
            f"precipitation ≤ {profile.optimal_precip_max:g} mm"
        ),
    ]
    if report.tomorrow_status is not None:
        lines.append(describe_tomorrow(report.tomorrow_status, outlook))
    return lines


def render_crop_cards(reports: List[CropReport], outlook: TomorrowOutlook) -> None:
    """
    Render the crop cards in rows.

    :param reports: Output of dashboard.build_crop_reports
    :param outlook: Tomorrow outlook the reports were evaluated against
    """
    style_manager = get_style_manager()
    for start in range(0, len(reports), CARDS_PER_ROW):
        row = reports[start : start + CARDS_PER_ROW]
        columns = st.columns(CARDS_PER_ROW)
        for column, report in zip(columns, row):
            with column:
                html = style_manager.build_crop_card(
                    report.status.tier,
                    f"{report.profile.icon} {report.profile.display_name}",
                    card_lines(report, outlook),
                    report.profile.comment,
                )
                st.markdown(html, unsafe_allow_html=True)


def render(reports_factory, outlook: TomorrowOutlook) -> None:
    """
    Build and render the crop reports.

    :param reports_factory: Callable returning the crop reports
    :param outlook: Tomorrow outlook
    """
    st.subheader("Harvest recommendations")
    try:
        reports = reports_factory()
    except InternalInconsistencyError as e:
        logger.exception(f"Harvest evaluation inconsistent: {e}")
        st.caption("Harvest recommendations temporarily unavailable")
        return
    render_crop_cards(reports, outlook)
