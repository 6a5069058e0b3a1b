"""
Crop threshold table.

Builds immutable CropProfile objects once from ``agrar.config.crop_index`` and
offers lookup, enumeration and selection helpers.
"""

from types import MappingProxyType
from typing import List, Mapping, Optional

from agrar.config import ALL_CROPS, crop_index
from agrar.models.harvest import CropProfile


def _build_profiles(index: Mapping[str, dict]) -> Mapping[str, CropProfile]:
    profiles = {}
    for crop_id, entry in index.items():
        profiles[crop_id] = CropProfile(
            id=crop_id,
            display_name=entry["name"],
            icon=entry["icon"],
            comment=entry["comment"],
            optimal_humidity_max=float(entry["humidity_max"]),
            optimal_temp_min=float(entry["temp_min"]),
            optimal_temp_max=float(entry["temp_max"]),
            optimal_precip_max=float(entry["precip_max"]),
        )
    return MappingProxyType(profiles)


CROP_PROFILES = _build_profiles(crop_index)


def lookup(crop_id: str) -> Optional[CropProfile]:
    """
    Find a crop profile by id.

    :param crop_id: Key in the crop table, e.g. "weizen".
    :return: CropProfile, or None when the id is unknown.
    """
    return CROP_PROFILES.get(crop_id)


def all_ids() -> frozenset:
    """All crop ids in the table."""
    return frozenset(CROP_PROFILES)


def all_profiles() -> List[CropProfile]:
    """All crop profiles in table order."""
    return list(CROP_PROFILES.values())


def resolve_selection(selection: str) -> List[CropProfile]:
    """
    Turn the crop selector value into the profiles to evaluate.

    :param selection: A crop id or ALL_CROPS.
    :return: List of CropProfile
    :raises ValueError: for an id that is not in the table.
    """
    if selection == ALL_CROPS:
        return all_profiles()
    profile = lookup(selection)
    if profile is None:
        raise ValueError(f"Unknown crop: {selection!r}")
    return [profile]
