"""
Dashboard controller.

Orchestrates fetch -> cache -> evaluate for the selected location and crops.
All session state lives in an explicit ``DashboardContext``; the Streamlit
app keeps one per browser session in ``st.session_state`` and the CLI builds
its own.

Refresh rules:
- automatic refreshes are not forced, so a fresh cache entry means no
  gateway call
- manual refreshes bypass the cache
- a result that arrives after the selected location changed is discarded
- every attempt, failed or not, is stamped in ``last_attempt_ms``; the
  automatic load waits a full interval after it, so a failure is retried
  only by the next scheduled refresh or a manual one
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from agrar.config import ALL_CROPS, AUTO_REFRESH_MS, CACHE_TTL_MS, DEFAULT_COUNTRY
from agrar.core import crops, forecast, harvest
from agrar.core.exceptions import GatewayError
from agrar.core.location import NormalizedLocation, normalize_location
from agrar.core.location_cache import LocationCache
from agrar.models.harvest import CropReport, TomorrowOutlook
from agrar.models.weather import WeatherPayload
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)

USER_ERROR_MESSAGE = "Weather data could not be loaded. Please try again later."

# Scheduled fragment reruns may fire a few ms before a full interval has
# passed since the attempt was stamped.
AUTO_REFRESH_SLACK_MS = 5_000

Gateway = Callable[[str], WeatherPayload]


@dataclass
class DashboardContext:
    """Per-session dashboard state."""

    cache: LocationCache
    location: NormalizedLocation = field(default_factory=lambda: normalize_location(None))
    country: str = DEFAULT_COUNTRY
    crop_selection: str = ALL_CROPS
    payload: Optional[WeatherPayload] = None
    error_message: Optional[str] = None
    last_refresh_ms: Optional[int] = None
    last_attempt_ms: Optional[int] = None
    ttl_ms: int = CACHE_TTL_MS

    @property
    def location_key(self) -> str:
        return self.location.key

    @property
    def has_data(self) -> bool:
        return self.payload is not None


def change_location(ctx: DashboardContext, raw: str, country: Optional[str] = None) -> bool:
    """
    Switch the selected location.

    Invalidates the cache entry of the previous location and clears the
    loaded payload so the old location never renders under the new name.

    :param ctx: Dashboard context
    :param raw: User input
    :param country: Selected country code, keeps the current one when None
    :return: True if the location actually changed
    """
    country = country or ctx.country
    new_location = normalize_location(raw, country)
    if new_location.key == ctx.location_key and country == ctx.country:
        return False

    logger.info(f"Location changed: {ctx.location.query!r} -> {new_location.query!r}")
    ctx.cache.invalidate(ctx.location_key)
    ctx.location = new_location
    ctx.country = country
    ctx.payload = None
    ctx.error_message = None
    ctx.last_refresh_ms = None
    ctx.last_attempt_ms = None
    return True


def _commit(ctx: DashboardContext, payload: WeatherPayload, refreshed_ms: int) -> None:
    ctx.payload = payload
    ctx.error_message = None
    ctx.last_refresh_ms = refreshed_ms


def refresh_weather(
    ctx: DashboardContext, gateway: Gateway, force: bool = False
) -> Optional[WeatherPayload]:
    """
    Load weather for the selected location, from cache when still fresh.

    Gateway failures are logged and turned into ``ctx.error_message``; they
    do not propagate.

    :param ctx: Dashboard context
    :param gateway: Callable taking the location query and returning a payload
    :param force: Skip the cache (manual refresh)
    :return: The committed payload, or None on failure or a superseded request
    """
    requested = ctx.location
    cache = ctx.cache
    ctx.last_attempt_ms = cache.clock()

    if not force:
        cached = cache.get(requested.key, ctx.ttl_ms)
        if cached is not None:
            entry = cache.entry()
            _commit(ctx, cached, entry.fetched_at_ms if entry else cache.clock())
            logger.debug(f"Serving {requested.key!r} from cache")
            return cached

    try:
        payload = gateway(requested.query)
    except GatewayError as e:
        logger.error(
            f"Weather fetch failed for {requested.query!r} ({type(e).__name__}): {e}"
        )
        if requested.key == ctx.location_key:
            ctx.error_message = USER_ERROR_MESSAGE
        return None

    if requested.key != ctx.location_key:
        logger.info(
            f"Discarding weather for {requested.key!r}, "
            f"location is now {ctx.location_key!r}"
        )
        return None

    entry = cache.put(requested.key, payload)
    _commit(ctx, payload, entry.fetched_at_ms)
    return payload


def is_refresh_due(
    last_refresh_ms: Optional[int], now_ms: int, interval_ms: int = AUTO_REFRESH_MS
) -> bool:
    """
    Whether the auto-refresh interval has elapsed.

    :param last_refresh_ms: Time of the last refresh or attempt, None if never
    :param now_ms: Current time in ms
    :param interval_ms: Refresh interval in ms
    :return: bool
    """
    if last_refresh_ms is None:
        return True
    return now_ms - last_refresh_ms >= interval_ms


def needs_auto_refresh(
    ctx: DashboardContext, now_ms: int, auto_update: bool = True
) -> bool:
    """
    Whether a rerun should load weather without user action.

    The first load of a location always happens. After that only the
    auto-refresh schedule triggers a load, counted from the last attempt
    so reruns after a failure do not call the gateway again.

    :param ctx: Dashboard context
    :param now_ms: Current time in ms
    :param auto_update: Whether scheduled refreshes are enabled
    :return: bool
    """
    if ctx.last_attempt_ms is None:
        return True
    return auto_update and is_refresh_due(
        ctx.last_attempt_ms, now_ms, AUTO_REFRESH_MS - AUTO_REFRESH_SLACK_MS
    )


def dismiss_error(ctx: DashboardContext) -> None:
    ctx.error_message = None


def tomorrow_outlook(ctx: DashboardContext, rng=None) -> TomorrowOutlook:
    if ctx.payload is None:
        raise ValueError("No weather data loaded")
    return forecast.project_tomorrow(ctx.payload, rng=rng)


def build_crop_reports(
    ctx: DashboardContext, rng=None, outlook: Optional[TomorrowOutlook] = None
) -> List[CropReport]:
    """
    Evaluate every selected crop for today and tomorrow.

    :param ctx: Dashboard context with loaded weather
    :param rng: Random source for the synthetic tomorrow estimate
    :param outlook: Precomputed tomorrow outlook, computed when None
    :return: One CropReport per selected crop
    :raises ValueError: when no weather is loaded or the selection is unknown
    """
    if ctx.payload is None:
        raise ValueError("No weather data loaded")

    if outlook is None:
        outlook = tomorrow_outlook(ctx, rng=rng)
    tomorrow = outlook.as_observation()

    reports = []
    for profile in crops.resolve_selection(ctx.crop_selection):
        status = harvest.evaluate(ctx.payload.current, profile)
        reports.append(
            CropReport(
                profile=profile,
                status=status,
                recommendation=harvest.recommend(status),
                tomorrow_status=harvest.evaluate(tomorrow, profile),
            )
        )
    return reports
