"""
Unit tests for the crop threshold table.
"""

import pytest

from agrar.config import ALL_CROPS, crop_index
from agrar.core import crops
from agrar.models.harvest import CropProfile


class TestLookup:
    def test_weizen_thresholds(self):
        profile = crops.lookup("weizen")
        assert profile.display_name == "Weizen"
        assert profile.optimal_temp_min == 22
        assert profile.optimal_temp_max == 26
        assert profile.optimal_humidity_max == 60
        assert profile.optimal_precip_max == 5

    def test_unknown_is_none(self):
        assert crops.lookup("tulips") is None

    def test_all_ids_enumerates_table(self):
        assert crops.all_ids() == frozenset(crop_index)

    def test_profiles_are_consistent(self):
        for profile in crops.all_profiles():
            assert profile.optimal_temp_min <= profile.optimal_temp_max
            assert 0 <= profile.optimal_humidity_max <= 100
            assert profile.optimal_precip_max >= 0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            crops.CROP_PROFILES["new"] = None


class TestResolveSelection:
    def test_all(self):
        assert len(crops.resolve_selection(ALL_CROPS)) == len(crop_index)

    def test_single(self):
        assert [p.id for p in crops.resolve_selection("raps")] == ["raps"]

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            crops.resolve_selection("tulips")


def test_profile_rejects_inverted_temperature_range():
    with pytest.raises(ValueError):
        CropProfile("x", "X", "", "", 50, 30, 20, 5)
