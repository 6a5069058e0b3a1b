#!/usr/bin/env python3
"""
harvest_report.py: Print harvest recommendations for a location.

Fetches current weather (or reuses the cached copy while it is younger than
the cache TTL) and prints one line per crop with today's tier, the
recommendation and tomorrow's tier.

Usage:
    python -m agrar.cli.harvest_report [--location Berlin] [--country DE]
        [--crop weizen|all] [--force] [--cache-file data/weather_cache.json]
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

from agrar.api.weather_client import fetch_weather
from agrar.config import ALL_CROPS, COUNTRY_NAMES, DEFAULT_COUNTRY, DEFAULT_LOCATION
from agrar.core import crops
from agrar.core.dashboard import (
    DashboardContext,
    build_crop_reports,
    change_location,
    refresh_weather,
    tomorrow_outlook,
)
from agrar.core.location_cache import LocationCache
from agrar.models.harvest import CropReport, TomorrowOutlook
from agrar.storage.local_store import JsonFileStore
from agrar.ui.harvest import TIER_LABELS
from agrar.utils.log_util import app_logger

logger = app_logger(__name__)

DEFAULT_CACHE_FILE = Path("data") / "weather_cache.json"


def format_report_line(report: CropReport) -> str:
    """One output line for a crop."""
    line = (
        f"{report.profile.icon} {report.profile.display_name:<12} "
        f"{TIER_LABELS[report.status.tier]:<16} "
        f"{report.recommendation.when_label}: {report.recommendation.reason_text}"
    )
    if report.tomorrow_status is not None:
        line += f" | tomorrow: {TIER_LABELS[report.tomorrow_status.tier]}"
    return line


def format_outlook_line(outlook: TomorrowOutlook) -> str:
    source = "estimate" if outlook.synthetic else "forecast"
    return (
        f"Tomorrow ({source}, {outlook.label}): {outlook.temperature_c:g}°C, "
        f"{outlook.humidity_percent:g}% humidity, "
        f"{outlook.chance_of_rain_percent}% chance of rain"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Harvest recommendations for a location")
    parser.add_argument("--location", type=str, default=DEFAULT_LOCATION, help="City or postal code")
    parser.add_argument(
        "--country",
        type=str,
        default=DEFAULT_COUNTRY,
        choices=sorted(COUNTRY_NAMES),
        help="Country code",
    )
    parser.add_argument(
        "--crop",
        type=str,
        default=ALL_CROPS,
        choices=[ALL_CROPS] + sorted(crops.all_ids()),
        help="Crop id or 'all'",
    )
    parser.add_argument("--force", action="store_true", help="Ignore cached weather")
    parser.add_argument("--cache-file", type=str, default=str(DEFAULT_CACHE_FILE), help="Cache file path")
    parser.add_argument("--seed", type=int, help="Seed for the synthetic tomorrow estimate")
    return parser


def run(args, gateway=fetch_weather) -> int:
    """
    Execute the report.

    :param args: Parsed arguments
    :param gateway: Weather gateway callable
    :return: Process exit code
    """
    ctx = DashboardContext(cache=LocationCache(JsonFileStore(args.cache_file)))
    change_location(ctx, args.location, args.country)
    ctx.crop_selection = args.crop

    payload = refresh_weather(ctx, gateway, force=args.force)
    if payload is None:
        print(f"❌ {ctx.error_message}")
        return 1

    rng = random.Random(args.seed)
    outlook = tomorrow_outlook(ctx, rng=rng)
    reports: List[CropReport] = build_crop_reports(ctx, outlook=outlook)

    current = payload.current
    print(f"📍 {payload.location.name}, {payload.location.country} ({payload.location.localtime})")
    print(
        f"Now: {current.temperature_c:g}°C, {current.humidity_percent:g}% humidity, "
        f"{current.precipitation_mm:g} mm, {current.condition_text}"
    )
    print(format_outlook_line(outlook))
    print()
    for report in reports:
        print(format_report_line(report))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except Exception as e:
        logger.exception(f"Harvest report failed: {e}")
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
