"""
Location cache for weather payloads.

A single-slot cache: ``put`` replaces whatever was stored before, so at most
one location's payload is held at a time. The entry is kept as a JSON string
under ``CACHE_STORAGE_KEY`` in any string mapping:

- ``st.session_state`` in the dashboard (survives reruns and page switches)
- ``JsonFileStore`` in the CLI (survives restarts)
- a plain dict in tests

A stored entry that cannot be decoded is a miss, never an error.

Usage:
    cache = LocationCache(st.session_state)
    cache.put("berlin, germany", payload)
    payload = cache.get("berlin, germany", CACHE_TTL_MS)
"""

import json
from typing import Callable, MutableMapping, Optional

from agrar.config import CACHE_STORAGE_KEY, CACHE_TTL_MS
from agrar.core.exceptions import CacheCorruptionError
from agrar.models.weather import CachedWeatherEntry, WeatherPayload
from agrar.utils.date_util import now_ms
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)


def encode_entry(entry: CachedWeatherEntry) -> str:
    """Serialize a cache entry into its persisted JSON record."""
    return json.dumps(
        {
            "locationKey": entry.location_key,
            "payload": entry.payload.to_dict(),
            "fetchedAtEpochMs": entry.fetched_at_ms,
        }
    )


def decode_entry(raw: str) -> CachedWeatherEntry:
    """
    Parse a persisted JSON record.

    :param raw: JSON string written by encode_entry
    :return: CachedWeatherEntry
    :raises CacheCorruptionError: if the record is unparseable or incomplete
    """
    try:
        record = json.loads(raw)
        fetched_at = record["fetchedAtEpochMs"]
        if isinstance(fetched_at, bool) or not isinstance(fetched_at, int):
            raise TypeError(f"fetchedAtEpochMs is not an integer: {fetched_at!r}")
        location_key = record["locationKey"]
        if not isinstance(location_key, str):
            raise TypeError(f"locationKey is not a string: {location_key!r}")
        return CachedWeatherEntry(
            location_key=location_key,
            payload=WeatherPayload.from_dict(record["payload"]),
            fetched_at_ms=fetched_at,
        )
    except (
        ValueError,
        KeyError,
        TypeError,
        AttributeError,
        OverflowError,
        RecursionError,
    ) as e:
        raise CacheCorruptionError(f"Unreadable cache entry: {e}") from e


class LocationCache:
    """
    Single-slot, TTL based cache of the last successful gateway payload.

    :param store: String mapping used as backing storage
    :param clock: Callable returning the current time in epoch ms
    :param storage_key: Key of the slot inside the store
    """

    def __init__(
        self,
        store: Optional[MutableMapping] = None,
        clock: Callable[[], int] = now_ms,
        storage_key: str = CACHE_STORAGE_KEY,
    ):
        self.store = store if store is not None else {}
        self.clock = clock
        self.storage_key = storage_key

    def entry(self) -> Optional[CachedWeatherEntry]:
        """
        Return the stored entry regardless of key and age.

        :return: CachedWeatherEntry, or None when empty or corrupt
        """
        raw = self.store.get(self.storage_key)
        if raw is None:
            return None
        try:
            return decode_entry(raw)
        except CacheCorruptionError as e:
            logger.debug(f"Ignoring cache entry: {e}")
            return None

    def get(self, location_key: str, ttl_ms: int = CACHE_TTL_MS) -> Optional[WeatherPayload]:
        """
        Return the cached payload when it is for this key and younger than ttl.

        :param location_key: Key of the currently selected location
        :param ttl_ms: Maximum age in milliseconds
        :return: WeatherPayload, or None on a miss
        """
        entry = self.entry()
        if entry is None:
            return None
        if not entry.is_valid(location_key, ttl_ms, self.clock()):
            logger.debug(
                f"Cache miss for {location_key!r} (stored {entry.location_key!r})"
            )
            return None
        return entry.payload

    def put(self, location_key: str, payload: WeatherPayload) -> CachedWeatherEntry:
        """
        Store a payload, replacing any previous entry.

        :param location_key: Key the payload was fetched for
        :param payload: Gateway payload
        :return: The stored entry
        """
        entry = CachedWeatherEntry(
            location_key=location_key,
            payload=payload,
            fetched_at_ms=self.clock(),
        )
        self.store[self.storage_key] = encode_entry(entry)
        logger.debug(f"Cached weather for {location_key!r} at {entry.fetched_at_ms}")
        return entry

    def invalidate(self, location_key: str) -> None:
        """Drop the stored entry if it belongs to location_key."""
        entry = self.entry()
        if entry is None or entry.location_key == location_key:
            self.clear()

    def clear(self) -> None:
        self.store.pop(self.storage_key, None)
