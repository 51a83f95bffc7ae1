"""
Models for grid operator (DSO) network tariffs.
"""

from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional


class GridProvider(BaseModel):
    """Static grid operator record."""
    code: str
    name: str
    gln: Optional[str] = None
    network_tariff: float  # kr/kWh, yearly weighted average
    charge_code: Optional[str] = None
    region: str  # "DK1" or "DK2"
    municipalities: List[str] = []


class TariffData(BaseModel):
    """Processed DatahubPricelist tariff for one grid operator."""
    gln: str
    provider: str
    valid_from: datetime
    valid_to: Optional[datetime] = None
    hourly_rates: List[float]  # 24 rates in kr/kWh, index = hour of day
    average_rate: float
    tariff_type: str  # "flat" or "time-of-use"
    season: str  # "summer" or "winter"


class TariffPeriodRate(BaseModel):
    hours: List[int]
    rate: float


class TariffPeriods(BaseModel):
    low: TariffPeriodRate
    high: TariffPeriodRate
    peak: TariffPeriodRate


class TariffPeriodsResponse(BaseModel):
    """Mean live rate per tariff period for one grid operator."""
    gln: str
    provider: str
    periods: TariffPeriods


class TariffLookupFailure(BaseModel):
    """Why a live tariff lookup did not produce a tariff."""
    reason: str  # invalid_gln, not_found, no_valid_record, upstream_error
    message: str


class TariffLookupResult(BaseModel):
    """Outcome of a live lookup: either a tariff or a failure, never both."""
    operator_id: str
    tariff: Optional[TariffData] = None
    failure: Optional[TariffLookupFailure] = None

    @property
    def ok(self) -> bool:
        return self.tariff is not None

    @classmethod
    def success(cls, operator_id: str, tariff: TariffData) -> "TariffLookupResult":
        return cls(operator_id=operator_id, tariff=tariff)

    @classmethod
    def failed(cls, operator_id: str, reason: str, message: str) -> "TariffLookupResult":
        return cls(
            operator_id=operator_id,
            failure=TariffLookupFailure(reason=reason, message=message),
        )


class NetworkTariff(BaseModel):
    """Network tariff ready for the calculator, with its provenance."""
    operator_id: str
    rate: float  # kr/kWh
    source: str  # "live", "fallback", "default" or "manual"
    failure: Optional[TariffLookupFailure] = None
