"""
Harvest status evaluation and recommendations.

The evaluator compares the latest observation with a crop's optimal ranges.
Checks run in a fixed order (temperature, humidity, precipitation) and every
violation adds one reason:

- 0 violations -> READY
- 1 violation  -> ACCEPTABLE
- 2 or more    -> PROBLEMATIC

There is no weighting and no smoothing; the result depends only on the
observation and the static profile.
"""

from agrar.core.exceptions import InternalInconsistencyError
from agrar.models.harvest import (
    CropProfile,
    HarvestStatus,
    HarvestTier,
    Recommendation,
)
from agrar.models.weather import WeatherObservation
from agrar.utils.weather_utils import format_value

WHEN_READY = "optimal today"
WHEN_ACCEPTABLE = "possible today"
WHEN_PROBLEMATIC = "waiting recommended"
REASON_ALL_MET = "all conditions met"
REASON_SEPARATOR = "; "


def _tier_for(issue_count: int) -> HarvestTier:
    if issue_count == 0:
        return HarvestTier.READY
    if issue_count == 1:
        return HarvestTier.ACCEPTABLE
    return HarvestTier.PROBLEMATIC


def evaluate(observation: WeatherObservation, profile: CropProfile) -> HarvestStatus:
    """
    Classify harvest readiness for one crop.

    Callers must only pass loaded observations; there is no "unknown" status.

    :param observation: Current (or projected) weather conditions
    :param profile: Crop thresholds
    :return: HarvestStatus with tier and ordered reasons
    """
    reasons = []

    temperature = observation.temperature_c
    if temperature < profile.optimal_temp_min:
        reasons.append(f"too cold: {format_value(temperature)}°C")
    elif temperature > profile.optimal_temp_max:
        reasons.append(f"too hot: {format_value(temperature)}°C")

    humidity = observation.humidity_percent
    if humidity > profile.optimal_humidity_max:
        reasons.append(f"humidity too high: {format_value(humidity)}%")

    precipitation = observation.precipitation_mm
    if precipitation > profile.optimal_precip_max:
        reasons.append(f"precipitation too high: {format_value(precipitation)} mm")

    return HarvestStatus(tier=_tier_for(len(reasons)), reasons=tuple(reasons))


def recommend(status: HarvestStatus) -> Recommendation:
    """
    Map a harvest status to the text shown on the crop card.

    :param status: Evaluator output
    :return: Recommendation
    :raises InternalInconsistencyError: if reasons do not fit the tier
    """
    if status.tier is HarvestTier.READY:
        return Recommendation(when_label=WHEN_READY, reason_text=REASON_ALL_MET)

    if status.tier is HarvestTier.ACCEPTABLE:
        if not status.reasons:
            raise InternalInconsistencyError("ACCEPTABLE status without a reason")
        return Recommendation(when_label=WHEN_ACCEPTABLE, reason_text=status.reasons[0])

    if status.tier is HarvestTier.PROBLEMATIC:
        if len(status.reasons) < 2:
            raise InternalInconsistencyError(
                f"PROBLEMATIC status with {len(status.reasons)} reason(s)"
            )
        return Recommendation(
            when_label=WHEN_PROBLEMATIC,
            reason_text=REASON_SEPARATOR.join(status.reasons[:2]),
        )

    raise InternalInconsistencyError(f"Unknown harvest tier: {status.tier!r}")
