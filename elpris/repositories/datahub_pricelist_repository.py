"""
Repository for network tariffs from the EnergiDataService DatahubPricelist
dataset.
"""

import json
import re
from datetime import datetime
from typing import Optional
import pandas as pd
import requests

from .base_repository import EnergiDataServiceRepository
from .exceptions import TariffLookupError
from ..config import app_config
from ..utils import danish_now_naive

GLN_PATTERN = re.compile(r"^\d{13}$")


class DatahubPricelistRepository(EnergiDataServiceRepository):
    """Fetches D03 (network tariff) price lists for a grid operator."""

    error_class = TariffLookupError

    def __init__(self, session: Optional[requests.Session] = None, base_url: str = None):
        config = app_config.energi_data_service
        super().__init__(session=session, timeout=config.tariff_timeout_seconds)
        self.base_url = base_url or config.pricelist_url

    @staticmethod
    def is_valid_gln(gln: str) -> bool:
        return bool(gln) and GLN_PATTERN.match(gln) is not None

    def find_tariff_records(self, gln: str, charge_code: str) -> pd.DataFrame:
        """Latest price list records for a GLN and charge code, newest first."""
        if not self.is_valid_gln(gln):
            raise TariffLookupError(
                f"GLN must be 13 digits, got {gln!r}", reason="invalid_gln")

        params = {
            'filter': json.dumps({
                'ChargeType': 'D03',
                'GLN_Number': gln,
                'ChargeTypeCode': charge_code,
            }),
            'sort': 'ValidFrom desc',
            'limit': '10',
        }
        df = self._get_records(self.base_url, params)

        if df.empty:
            self.logger.warning(
                f"No tariff data found for GLN {gln} with code {charge_code}")
            raise TariffLookupError(
                f"No tariff data for GLN {gln} with code {charge_code}",
                reason="not_found")

        return df

    def find_current_record(self, gln: str, charge_code: str,
                            at: Optional[datetime] = None) -> pd.Series:
        """
        The record valid at the given moment (ValidFrom <= at < ValidTo).

        ValidFrom and ValidTo are Danish local time, so ``at`` defaults to the
        current Danish wall-clock time.
        """
        df = self.find_tariff_records(gln, charge_code)
        at = at or danish_now_naive()

        valid_from = pd.to_datetime(df['ValidFrom'])
        if 'ValidTo' in df.columns:
            valid_to = pd.to_datetime(df['ValidTo'])
        else:
            valid_to = pd.Series(pd.NaT, index=df.index)

        current = df[(valid_from <= at) & (valid_to.isna() | (valid_to > at))]
        if current.empty:
            self.logger.warning(f"No valid tariff found for GLN {gln} at {at}")
            raise TariffLookupError(
                f"No tariff for GLN {gln} valid at {at.isoformat()}",
                reason="no_valid_record")

        return current.iloc[0]
