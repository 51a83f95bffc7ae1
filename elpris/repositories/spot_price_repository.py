"""
Repository for day-ahead spot prices from the EnergiDataService
Elspotprices dataset.
"""

import json
from datetime import date, timedelta
from typing import Optional
import pandas as pd
import requests

from .base_repository import EnergiDataServiceRepository
from .exceptions import SpotPriceFetchError
from ..config import app_config
from ..utils import ttl_cache

PRICE_AREAS = ("DK1", "DK2")


class SpotPriceRepository(EnergiDataServiceRepository):
    """Repository for hourly spot prices per price area."""

    error_class = SpotPriceFetchError

    def __init__(self, session: Optional[requests.Session] = None, base_url: str = None):
        config = app_config.energi_data_service
        super().__init__(session=session, timeout=config.spot_price_timeout_seconds)
        self.base_url = base_url or config.spot_prices_url

    @ttl_cache(ttl_seconds=app_config.energi_data_service.spot_price_cache_ttl_seconds,
               max_entries=app_config.energi_data_service.spot_price_cache_size,
               stale_on=(SpotPriceFetchError,))
    def find_by_area_and_dates(self, area: str, start: date,
                               end: Optional[date] = None) -> pd.DataFrame:
        """
        Find spot prices for an area from start up to and including end.

        Returns columns HourUTC, HourDK, PriceArea, SpotPriceDKK (DKK/MWh)
        and spot_price_kr_kwh, sorted by hour. Start and end are Danish calendar days.

        Results are cached for five minutes; if the source fails, the last
        result for the same query is served even when expired.
        """
        if area not in PRICE_AREAS:
            raise ValueError(f"Price area must be one of {PRICE_AREAS}, got {area!r}")

        end_exclusive = (end or start) + timedelta(days=1)
        params = {
            'start': start.isoformat(),
            'end': end_exclusive.isoformat(),
            'filter': json.dumps({'PriceArea': [area]}),
            'sort': 'HourUTC ASC',
        }
        df = self._get_records(self.base_url, params)

        if df.empty:
            return df

        df = df.dropna(subset=['SpotPriceDKK']).copy()
        # DKK/MWh -> kr/kWh
        df['spot_price_kr_kwh'] = df['SpotPriceDKK'].astype(float) / 1000
        return df.sort_values('HourUTC').reset_index(drop=True)
