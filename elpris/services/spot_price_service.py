"""
Service for day-ahead spot price data.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional
import pandas as pd
from fastapi import HTTPException

from .base_service import BaseService
from ..config import app_config
from ..repositories import SpotPriceRepository, SpotPriceFetchError, PRICE_AREAS
from ..models import SpotPrice, SpotPricesResponse, KrPerKwh, kr
from ..utils import danish_now, to_danish_time


class SpotPriceService(BaseService):
    """Service for spot price operations."""

    def __init__(self, repository: SpotPriceRepository = None,
                 default_spot_price: float = None):
        """Initialize service with repository dependency injection."""
        super().__init__(repository or SpotPriceRepository())
        self.default_spot_price = (default_spot_price if default_spot_price is not None
                                   else app_config.pricing.default_spot_price)
        self.logger = logging.getLogger(__name__)

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for spot price queries."""
        area = kwargs.get('area')

        if area is not None and area not in PRICE_AREAS:
            raise HTTPException(
                status_code=400,
                detail=f"Area must be one of {', '.join(PRICE_AREAS)}")

        return True

    @staticmethod
    def _to_records(df: pd.DataFrame) -> List[SpotPrice]:
        records = []
        for _, row in df.iterrows():
            records.append(SpotPrice(
                region=row['PriceArea'],
                hour_utc=str(row['HourUTC']),
                hour_dk=str(row['HourDK']),
                spot_price_kr_kwh=float(row['spot_price_kr_kwh']),
                spot_price_dkk_mwh=float(row['SpotPriceDKK'])
            ))
        return records

    def get_spot_prices(self, area: str, day: Optional[date] = None,
                        end_day: Optional[date] = None) -> SpotPricesResponse:
        """Hourly spot prices for an area and day (or day range)."""
        self.validate_input(area=area)
        day = day or danish_now().date()

        if end_day is not None and end_day < day:
            raise HTTPException(
                status_code=400, detail="End date must not be before start date")

        try:
            df = self.repository.find_by_area_and_dates(area, day, end_day)
        except SpotPriceFetchError as e:
            raise HTTPException(
                status_code=502, detail=f"Spot price source unavailable: {e}")
        except Exception as e:
            self.handle_exception(e, "Error retrieving spot prices")

        prices = [] if df.empty else self._to_records(df)
        return SpotPricesResponse(
            area=area,
            date=day.isoformat(),
            prices=prices,
            count=len(prices)
        )

    def get_current_spot_price(self, area: str, now: Optional[datetime] = None) -> KrPerKwh:
        """
        Spot price for the current hour.

        Falls back to the configured default when the source fails or has no
        price at or before now. Negative prices are returned as they are.
        """
        self.validate_input(area=area)
        now = now or datetime.now(timezone.utc)
        # The dataset is queried by Danish calendar day
        day = to_danish_time(now).date()

        try:
            df = self.repository.find_by_area_and_dates(area, day)
        except SpotPriceFetchError as e:
            self.logger.warning(
                f"⚠️  Spot price fetch failed for {area}, using default "
                f"{self.default_spot_price}: {e}")
            return kr(self.default_spot_price)

        if df.empty:
            self.logger.warning(
                f"⚠️  No spot prices for {area} on {day}, using default")
            return kr(self.default_spot_price)

        hours = pd.to_datetime(df['HourUTC'], utc=True)
        moment = pd.Timestamp(now)
        moment = (moment.tz_localize('UTC') if moment.tzinfo is None
                  else moment.tz_convert('UTC'))
        past = df[hours <= moment]
        if past.empty:
            return kr(self.default_spot_price)

        return kr(float(past.iloc[-1]['spot_price_kr_kwh']))
