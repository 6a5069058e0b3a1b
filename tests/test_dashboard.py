"""
Unit tests for the dashboard controller: refresh rules, staleness guard,
error conversion and crop reports.
"""

import random
from unittest.mock import MagicMock

import pytest

from agrar.config import ALL_CROPS, AUTO_REFRESH_MS, CACHE_TTL_MS
from agrar.core import crops
from agrar.core.dashboard import (
    AUTO_REFRESH_SLACK_MS,
    USER_ERROR_MESSAGE,
    DashboardContext,
    build_crop_reports,
    change_location,
    dismiss_error,
    is_refresh_due,
    needs_auto_refresh,
    refresh_weather,
)
from agrar.core.exceptions import MalformedResponseError, TransportError
from agrar.core.location_cache import LocationCache
from agrar.models.harvest import HarvestTier


@pytest.fixture
def ctx(clock):
    return DashboardContext(cache=LocationCache({}, clock=clock))


class TestRefreshWeather:
    """Fetch, cache and commit."""

    def test_first_refresh_calls_gateway_and_caches(self, ctx, payload, clock):
        gateway = MagicMock(return_value=payload)

        result = refresh_weather(ctx, gateway)

        assert result == payload
        gateway.assert_called_once_with("Berlin, Germany")
        assert ctx.payload == payload
        assert ctx.last_refresh_ms == clock.now
        assert ctx.cache.get(ctx.location_key, CACHE_TTL_MS) == payload

    def test_fresh_cache_skips_gateway(self, ctx, payload, clock):
        gateway = MagicMock(return_value=payload)
        refresh_weather(ctx, gateway)
        clock.advance(CACHE_TTL_MS - 1)

        refresh_weather(ctx, gateway)

        gateway.assert_called_once()

    def test_expired_cache_refetches(self, ctx, payload, clock):
        gateway = MagicMock(return_value=payload)
        refresh_weather(ctx, gateway)
        clock.advance(CACHE_TTL_MS)

        refresh_weather(ctx, gateway)

        assert gateway.call_count == 2

    def test_force_bypasses_cache(self, ctx, payload):
        gateway = MagicMock(return_value=payload)
        refresh_weather(ctx, gateway)
        refresh_weather(ctx, gateway, force=True)
        assert gateway.call_count == 2

    @pytest.mark.parametrize(
        "error",
        [TransportError("down", status_code=503), MalformedResponseError("bad", {"x": 1})],
    )
    def test_gateway_errors_become_user_message(self, ctx, error):
        gateway = MagicMock(side_effect=error)

        assert refresh_weather(ctx, gateway) is None
        assert ctx.error_message == USER_ERROR_MESSAGE
        assert "bad" not in ctx.error_message
        assert ctx.payload is None

    def test_error_keeps_previous_payload(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")), force=True)
        assert ctx.payload == payload
        assert ctx.error_message == USER_ERROR_MESSAGE

    def test_success_clears_error(self, ctx, payload):
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")))
        refresh_weather(ctx, MagicMock(return_value=payload))
        assert ctx.error_message is None

    def test_unexpected_errors_propagate(self, ctx):
        with pytest.raises(RuntimeError):
            refresh_weather(ctx, MagicMock(side_effect=RuntimeError("bug")))


class TestStalenessGuard:
    """Results for a superseded location are discarded."""

    def test_superseded_result_not_committed(self, ctx, payload):
        def slow_gateway(query):
            change_location(ctx, "Munich")
            return payload

        result = refresh_weather(ctx, slow_gateway)

        assert result is None
        assert ctx.payload is None
        assert ctx.location.query == "Munich, Germany"
        assert ctx.cache.entry() is None

    def test_superseded_error_not_shown(self, ctx):
        def failing_gateway(query):
            change_location(ctx, "Munich")
            raise TransportError("down")

        refresh_weather(ctx, failing_gateway)
        assert ctx.error_message is None


class TestChangeLocation:
    def test_change_clears_state_and_cache(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        ctx.error_message = "old"

        assert change_location(ctx, "Hamburg") is True

        assert ctx.payload is None
        assert ctx.error_message is None
        assert ctx.last_refresh_ms is None
        assert ctx.cache.entry() is None

    def test_same_location_is_noop(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        assert change_location(ctx, " berlin ") is False
        assert ctx.payload == payload

    def test_country_change(self, ctx):
        assert change_location(ctx, "1010", "AT") is True
        assert ctx.country == "AT"
        assert ctx.location.query == "Vienna, Austria"


class TestRefreshDue:
    def test_never_refreshed(self):
        assert is_refresh_due(None, 1000)

    def test_interval(self):
        assert not is_refresh_due(0, AUTO_REFRESH_MS - 1)
        assert is_refresh_due(0, AUTO_REFRESH_MS)


class TestAutoRefreshGate:
    """Automatic loads after failures wait for the schedule."""

    def test_first_load_always_runs(self, ctx, clock):
        assert needs_auto_refresh(ctx, clock(), auto_update=False)

    def test_attempt_is_stamped_on_failure(self, ctx, clock):
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")))
        assert ctx.last_attempt_ms == clock()
        assert ctx.last_refresh_ms is None

    def test_dismissed_failure_is_not_retried_on_rerun(self, ctx, clock):
        gateway = MagicMock(side_effect=TransportError("down"))

        # initial page load
        if needs_auto_refresh(ctx, clock()):
            refresh_weather(ctx, gateway)
        assert ctx.error_message == USER_ERROR_MESSAGE

        # Dismiss click triggers a rerun
        dismiss_error(ctx)
        clock.advance(1_000)
        if needs_auto_refresh(ctx, clock()):
            refresh_weather(ctx, gateway)

        assert gateway.call_count == 1
        assert ctx.error_message is None

    def test_failure_retried_by_schedule(self, ctx, clock):
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")))
        clock.advance(AUTO_REFRESH_MS - AUTO_REFRESH_SLACK_MS - 1)
        assert not needs_auto_refresh(ctx, clock())

        clock.advance(1)
        assert needs_auto_refresh(ctx, clock())
        assert not needs_auto_refresh(ctx, clock(), auto_update=False)

    def test_manual_refresh_after_failure(self, ctx, payload):
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")))
        assert refresh_weather(ctx, MagicMock(return_value=payload), force=True) == payload
        assert ctx.error_message is None

    def test_location_change_loads_immediately(self, ctx, clock):
        refresh_weather(ctx, MagicMock(side_effect=TransportError("down")))
        change_location(ctx, "Hamburg")
        assert ctx.last_attempt_ms is None
        assert needs_auto_refresh(ctx, clock())


class TestCropReports:
    """Evaluation across selected crops."""

    def test_all_crops(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        ctx.crop_selection = ALL_CROPS

        reports = build_crop_reports(ctx)

        assert [r.profile.id for r in reports] == [p.id for p in crops.all_profiles()]
        assert all(r.tomorrow_status is not None for r in reports)

    def test_single_crop_weizen_ready(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        ctx.crop_selection = "weizen"

        reports = build_crop_reports(ctx)

        assert len(reports) == 1
        assert reports[0].status.tier is HarvestTier.READY
        assert reports[0].recommendation.when_label == "optimal today"
        # tomorrow: 23°C, 66% humidity, 3.4 mm
        assert reports[0].tomorrow_status.tier is HarvestTier.ACCEPTABLE

    def test_synthetic_tomorrow_with_seed(self, ctx, payload_no_forecast):
        refresh_weather(ctx, MagicMock(return_value=payload_no_forecast))
        ctx.crop_selection = "weizen"
        reports = build_crop_reports(ctx, rng=random.Random(5))
        assert reports[0].tomorrow_status is not None

    def test_requires_loaded_data(self, ctx):
        with pytest.raises(ValueError):
            build_crop_reports(ctx)

    def test_unknown_crop(self, ctx, payload):
        refresh_weather(ctx, MagicMock(return_value=payload))
        ctx.crop_selection = "tulips"
        with pytest.raises(ValueError):
            build_crop_reports(ctx)


def test_dismiss_error(ctx):
    ctx.error_message = USER_ERROR_MESSAGE
    dismiss_error(ctx)
    assert ctx.error_message is None
