"""
Service for grid operator network tariffs.

Resolution happens in two explicit stages, separate from the price
calculation:

1. ``resolve_network_tariff`` asks DatahubPricelist for the live tariff and
   returns a TariffLookupResult holding either the tariff or the failure.
2. ``with_fallback`` turns that result into a NetworkTariff: the live rate
   when there is one, otherwise the static table value for the operator,
   otherwise the national default.

``get_network_tariff`` composes both and is what callers feed into the
calculator.
"""

import logging
from typing import List, Optional
import numpy as np
import pandas as pd
from fastapi import HTTPException

from .base_service import BaseService
from ..config import app_config
from ..repositories import (
    DatahubPricelistRepository,
    GridProviderRepository,
    TariffLookupError
)
from ..models import (
    GridProvider,
    TariffData,
    TariffPeriodRate,
    TariffPeriods,
    TariffPeriodsResponse,
    TariffLookupResult,
    TariffLookupFailure,
    NetworkTariff
)
from ..utils import ttl_cache, danish_now

LOW_HOURS = [0, 1, 2, 3, 4, 5]  # 00:00-06:00
PEAK_HOURS = [17, 18, 19, 20]  # 17:00-21:00
HIGH_HOURS = [6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 21, 22, 23]

# Share of household consumption per period
DEFAULT_CONSUMPTION_PATTERN = {"low": 0.25, "high": 0.60, "peak": 0.15}

SUMMER_MONTHS = range(4, 10)  # April-September


class NetworkTariffService(BaseService):
    """Service for network tariff lookups with static fallback."""

    def __init__(self, pricelist_repository: DatahubPricelistRepository = None,
                 grid_repository: GridProviderRepository = None,
                 default_rate: float = None):
        """Initialize service with repository dependency injection."""
        super().__init__(pricelist_repository or DatahubPricelistRepository())
        self.grid_repository = grid_repository or GridProviderRepository()
        self.default_rate = (default_rate if default_rate is not None
                             else app_config.pricing.default_network_tariff)
        self.logger = logging.getLogger(__name__)

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for tariff queries."""
        gln = kwargs.get('gln')
        charge_code = kwargs.get('charge_code')

        if gln is not None and not DatahubPricelistRepository.is_valid_gln(gln):
            raise HTTPException(
                status_code=400, detail="GLN must be 13 digits")

        if charge_code is not None and not (2 <= len(charge_code) <= 16):
            raise HTTPException(
                status_code=400,
                detail="Charge code must be between 2 and 16 characters")

        return True

    # -- tariff processing -------------------------------------------------

    @staticmethod
    def calculate_weighted_average(hourly_rates: List[float],
                                   pattern: dict = None) -> float:
        """Average rate weighted by how consumption spreads over the day."""
        pattern = pattern or DEFAULT_CONSUMPTION_PATTERN
        rates = np.asarray(hourly_rates, dtype=float)

        low_avg = rates[LOW_HOURS].mean()
        high_avg = rates[HIGH_HOURS].mean()
        peak_avg = rates[PEAK_HOURS].mean()

        return float(low_avg * pattern["low"]
                     + high_avg * pattern["high"]
                     + peak_avg * pattern["peak"])

    @classmethod
    def process_tariff_record(cls, record: pd.Series, gln: str) -> TariffData:
        """Turn a DatahubPricelist record into TariffData."""
        hourly_rates = []
        for i in range(1, 25):
            price = record.get(f"Price{i}")
            hourly_rates.append(0.0 if price is None or pd.isna(price) else float(price))

        tariff_type = "flat" if len(set(hourly_rates)) == 1 else "time-of-use"

        valid_from = pd.to_datetime(record['ValidFrom']).to_pydatetime()
        valid_to_raw = record.get('ValidTo')
        valid_to = (None if valid_to_raw is None or pd.isna(valid_to_raw)
                    else pd.to_datetime(valid_to_raw).to_pydatetime())

        season = "summer" if valid_from.month in SUMMER_MONTHS else "winter"

        return TariffData(
            gln=gln,
            provider=str(record.get('ChargeOwner') or ''),
            valid_from=valid_from,
            valid_to=valid_to,
            hourly_rates=hourly_rates,
            average_rate=cls.calculate_weighted_average(hourly_rates),
            tariff_type=tariff_type,
            season=season
        )

    @staticmethod
    def current_hourly_rate(tariff: TariffData, hour: Optional[int] = None) -> float:
        """Rate for the given hour, or the current Danish hour, of the day."""
        if hour is None:
            hour = danish_now().hour
        return tariff.hourly_rates[hour]

    @staticmethod
    def tariff_periods(tariff: TariffData) -> TariffPeriods:
        """Mean rate for each of the low, high and peak periods."""
        rates = np.asarray(tariff.hourly_rates, dtype=float)
        return TariffPeriods(
            low=TariffPeriodRate(hours=LOW_HOURS, rate=float(rates[LOW_HOURS].mean())),
            high=TariffPeriodRate(hours=HIGH_HOURS, rate=float(rates[HIGH_HOURS].mean())),
            peak=TariffPeriodRate(hours=PEAK_HOURS, rate=float(rates[PEAK_HOURS].mean()))
        )

    # -- stage 1: live lookup ----------------------------------------------

    def charge_code_for(self, gln: str) -> str:
        return (self.grid_repository.find_charge_code(gln)
                or app_config.energi_data_service.default_charge_code)

    def gln_for(self, operator_id: str) -> Optional[str]:
        """Map a DSO code or GLN to a GLN."""
        if DatahubPricelistRepository.is_valid_gln(operator_id):
            return operator_id
        row = self.grid_repository.find_by_id(operator_id)
        if row is None or row['gln'] is None or pd.isna(row['gln']):
            return None
        return row['gln']

    @ttl_cache(ttl_seconds=app_config.energi_data_service.tariff_cache_ttl_seconds)
    def fetch_tariff(self, gln: str, charge_code: str) -> TariffData:
        """Live tariff for a GLN. Raises TariffLookupError."""
        record = self.repository.find_current_record(gln, charge_code)
        return self.process_tariff_record(record, gln)

    def resolve_network_tariff(self, operator_id: str,
                               charge_code: Optional[str] = None) -> TariffLookupResult:
        """Live lookup that reports failure as a value instead of raising."""
        gln = self.gln_for(operator_id)
        if gln is None:
            return TariffLookupResult.failed(
                operator_id, "invalid_gln",
                f"No GLN known for grid operator {operator_id!r}")

        code = charge_code or self.charge_code_for(gln)
        try:
            tariff = self.fetch_tariff(gln, code)
        except TariffLookupError as e:
            self.logger.warning(
                f"Live tariff lookup failed for {operator_id} ({e.reason}): {e}")
            return TariffLookupResult.failed(operator_id, e.reason, str(e))

        return TariffLookupResult.success(operator_id, tariff)

    # -- stage 2: fallback -------------------------------------------------

    def default_tariff(self, operator_id: str,
                       failure: Optional[TariffLookupFailure] = None) -> NetworkTariff:
        return NetworkTariff(operator_id=operator_id, rate=self.default_rate,
                             source="default", failure=failure)

    def with_fallback(self, result: TariffLookupResult,
                      operator_id: Optional[str] = None,
                      use_current_hour: bool = False,
                      hour: Optional[int] = None) -> NetworkTariff:
        """Live rate if the lookup succeeded, else static table, else default."""
        operator_id = operator_id or result.operator_id

        if result.ok:
            rate = (self.current_hourly_rate(result.tariff, hour)
                    if use_current_hour else result.tariff.average_rate)
            return NetworkTariff(operator_id=operator_id, rate=rate, source="live")

        static_rate = self.grid_repository.find_fallback_tariff(operator_id)
        if static_rate is not None:
            self.logger.info(
                f"Using static network tariff {static_rate} for {operator_id}")
            return NetworkTariff(operator_id=operator_id, rate=static_rate,
                                 source="fallback", failure=result.failure)

        self.logger.warning(
            f"Unknown grid operator {operator_id}, using default tariff {self.default_rate}")
        return self.default_tariff(operator_id, failure=result.failure)

    def get_network_tariff(self, operator_id: str, use_current_hour: bool = False,
                           charge_code: Optional[str] = None) -> NetworkTariff:
        """Network tariff for an operator, never failing."""
        result = self.resolve_network_tariff(operator_id, charge_code)
        return self.with_fallback(result, operator_id, use_current_hour=use_current_hour)

    # -- API helpers -------------------------------------------------------

    def get_tariff(self, gln: str, charge_code: Optional[str] = None) -> TariffData:
        """Live tariff for the /tariffs endpoint, mapping failures to HTTP errors."""
        self.validate_input(gln=gln, charge_code=charge_code)

        result = self.resolve_network_tariff(gln, charge_code)
        if result.ok:
            return result.tariff

        status = 502 if result.failure.reason == "upstream_error" else 404
        raise HTTPException(status_code=status, detail=result.failure.message)

    def get_tariff_periods(self, gln: str, charge_code: Optional[str] = None) -> TariffPeriodsResponse:
        """Low, high and peak rates of the live tariff for a GLN."""
        tariff = self.get_tariff(gln, charge_code)
        return TariffPeriodsResponse(
            gln=tariff.gln,
            provider=tariff.provider,
            periods=self.tariff_periods(tariff)
        )

    def get_grid_providers(self, municipality: Optional[str] = None) -> List[GridProvider]:
        """Static grid operators, optionally only those serving a municipality."""
        try:
            if municipality:
                df = self.grid_repository.find_by_municipality(municipality)
            else:
                df = self.grid_repository.find_all()

            providers = []
            for _, row in df.iterrows():
                providers.append(GridProvider(
                    code=row['code'],
                    name=row['name'],
                    gln=None if pd.isna(row['gln']) else row['gln'],
                    network_tariff=float(row['network_tariff']),
                    charge_code=None if pd.isna(row['charge_code']) else row['charge_code'],
                    region=row['region'],
                    municipalities=list(row['municipalities'])
                ))

            return providers

        except Exception as e:
            self.handle_exception(e, "Error retrieving grid providers")

    def clear_cache(self) -> None:
        NetworkTariffService.fetch_tariff.cache_clear()
