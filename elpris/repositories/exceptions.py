"""
Errors raised by the data access layer when an upstream source fails.
"""

from typing import Optional


class UpstreamDataError(Exception):
    """An upstream data source could not deliver usable data."""

    reason: str = "upstream_error"

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        if reason is not None:
            self.reason = reason


class TariffLookupError(UpstreamDataError):
    """DatahubPricelist returned no usable tariff."""


class SpotPriceFetchError(UpstreamDataError):
    """Elspotprices could not be fetched."""
