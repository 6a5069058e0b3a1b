"""
Harvest data models.

Crop profiles come from the static threshold table in agrar.config; the
status, recommendation and outlook types are produced per render and never
persisted.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from agrar.models.weather import WeatherObservation


@dataclass(frozen=True)
class CropProfile:
    """Optimal harvest conditions for one crop."""

    id: str
    display_name: str
    icon: str
    comment: str
    optimal_humidity_max: float
    optimal_temp_min: float
    optimal_temp_max: float
    optimal_precip_max: float

    def __post_init__(self):
        if self.optimal_temp_min > self.optimal_temp_max:
            raise ValueError(
                f"{self.id}: optimal_temp_min {self.optimal_temp_min} "
                f"exceeds optimal_temp_max {self.optimal_temp_max}"
            )


class HarvestTier(Enum):
    READY = "ready"
    ACCEPTABLE = "acceptable"
    PROBLEMATIC = "problematic"


@dataclass(frozen=True)
class HarvestStatus:
    """Evaluator output: tier plus threshold violations in evaluation order."""

    tier: HarvestTier
    reasons: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    when_label: str
    reason_text: str


@dataclass(frozen=True)
class TomorrowOutlook:
    """Tomorrow's conditions, either from the forecast or estimated."""

    date: Optional[date]
    temperature_c: float
    humidity_percent: float
    chance_of_rain_percent: int
    precipitation_mm: float
    condition_text: str
    condition_icon: str
    label: str
    synthetic: bool

    def as_observation(self) -> WeatherObservation:
        """Expose the outlook as an observation so it can be evaluated per crop."""
        return WeatherObservation(
            temperature_c=self.temperature_c,
            humidity_percent=self.humidity_percent,
            precipitation_mm=self.precipitation_mm,
            wind_kph=0.0,
            condition_text=self.condition_text,
            condition_icon=self.condition_icon,
        )


@dataclass(frozen=True)
class CropReport:
    """Everything the UI needs to draw one crop card."""

    profile: CropProfile
    status: HarvestStatus
    recommendation: Recommendation
    tomorrow_status: Optional[HarvestStatus] = None
