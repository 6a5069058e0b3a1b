"""
Exception hierarchy for the Agrar dashboard.

Gateway failures are caught at the dashboard controller and turned into a
single user-facing message. Cache corruption never leaves the cache.
Internal inconsistencies are programming defects and always propagate.
"""


class AgrarError(Exception):
    """Base class for all dashboard errors."""


class GatewayError(AgrarError):
    """The weather gateway could not deliver usable data."""


class TransportError(GatewayError):
    """Gateway unreachable or answered with a non-success status."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(GatewayError):
    """Gateway answered, but required fields are missing or invalid."""

    def __init__(self, message: str, raw_payload=None):
        super().__init__(message)
        self.raw_payload = raw_payload


class CacheCorruptionError(AgrarError):
    """A persisted cache entry could not be decoded."""


class InternalInconsistencyError(AgrarError):
    """Evaluator or recommendation contract was violated."""
