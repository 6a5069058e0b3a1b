from datetime import datetime, timezone

from dateutil import parser

from agrar.utils.log_util import app_logger

logger = app_logger(__name__)


def to_date(date_string: str):
    """
    Convert a date string to a datetime object.

    :param date_string: str - The date string to parse.
    :return: datetime - Parsed datetime object.
    :raises: Exception if date string parsing fails.
    """
    try:
        return parser.parse(date_string)
    except Exception as e:
        logger.debug(f"Error parsing date string {date_string!r}: {e}")
        raise


def now_ms() -> int:
    """Current UNIX time in milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def format_ts_utc(ms_ts) -> str:
    """Convert a UNIX timestamp in ms to a human-readable UTC string."""
    if ms_ts is None:
        return "never"
    try:
        return datetime.fromtimestamp(ms_ts / 1000, tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except Exception:
        return "Invalid timestamp"
