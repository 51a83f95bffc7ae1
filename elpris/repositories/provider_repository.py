"""
Repository for the built-in electricity provider catalogue.
Fees are in øre/kWh, subscriptions in kr/month.
"""

import pandas as pd
from typing import Optional, Any, Dict, List

from .base_repository import BaseRepository


PROVIDER_CATALOGUE: List[Dict[str, Any]] = [
    {"id": "vindstod-green", "slug": "vindstod", "provider_name": "Vindstød",
     "product_name": "Vindstød Grøn Variabel", "markup": 6.0, "monthly_subscription": 39.0,
     "signup_link": "https://vindstoed.dk/bestil", "has_no_binding": True,
     "has_free_signup": True, "description": "100% vindenergi fra danske vindmøller"},
    {"id": "norlys-variabel", "slug": "norlys", "provider_name": "Norlys",
     "product_name": "Norlys Variabel", "markup": 5.0, "monthly_subscription": 45.0,
     "signup_link": "https://norlys.dk/privat/el/elaftaler", "has_no_binding": True,
     "has_free_signup": True, "description": "Danmarks største energikoncern"},
    {"id": "andel-energi-variabel", "slug": "andel-energi", "provider_name": "Andel Energi",
     "product_name": "Andel Variabel", "markup": 4.0, "monthly_subscription": 29.0,
     "signup_link": "https://andelenergi.dk/privat/el", "has_no_binding": True,
     "has_free_signup": True, "description": "Kundejet energiselskab"},
    {"id": "nrgi-spot", "slug": "nrgi", "provider_name": "NRGI",
     "product_name": "NRGI Spot", "markup": 4.5, "monthly_subscription": 35.0,
     "signup_link": "https://nrgi.dk/privat/el", "has_no_binding": True,
     "has_free_signup": False, "description": "Østjyllands energiselskab"},
    {"id": "energifyn-variabel", "slug": "energifyn", "provider_name": "EnergiFyn",
     "product_name": "EnergiFyn Variabel", "markup": 5.5, "monthly_subscription": 40.0,
     "signup_link": "https://www.energifyn.dk/privat/el", "has_no_binding": False,
     "has_free_signup": True, "description": "Fyns energiselskab"},
    {"id": "ok-el-variabel", "slug": "ok", "provider_name": "OK",
     "product_name": "OK El Variabel", "markup": 3.0, "monthly_subscription": 25.0,
     "signup_link": "https://www.ok.dk/privat/produkter/el", "has_no_binding": True,
     "has_free_signup": True, "description": "Andelsejet energiselskab"},
    {"id": "velkommen-variabel", "slug": "velkommen", "provider_name": "Velkommen",
     "product_name": "Velkommen Variabel", "markup": 3.5, "monthly_subscription": 30.0,
     "signup_link": "https://velkommen.dk", "has_no_binding": True,
     "has_free_signup": True, "description": "Digital elhandler"},
    {"id": "ewii-variabel", "slug": "ewii", "provider_name": "EWII",
     "product_name": "EWII Variabel", "markup": 4.8, "monthly_subscription": 38.0,
     "signup_link": "https://www.ewii.dk/privat/el", "has_no_binding": True,
     "has_free_signup": False, "description": "Trekantområdets energiselskab"},
    {"id": "dcc-energi-variabel", "slug": "dcc-energi", "provider_name": "DCC Energi",
     "product_name": "DCC Variabel", "markup": 5.2, "monthly_subscription": 42.0,
     "signup_link": "https://dccenergi.dk/privat", "has_no_binding": False,
     "has_free_signup": True, "description": "Lokal energileverandør"},
    {"id": "energi-viborg-variabel", "slug": "energi-viborg", "provider_name": "Energi Viborg",
     "product_name": "Energi Viborg Variabel", "markup": 4.6, "monthly_subscription": 36.0,
     "signup_link": "https://www.energiviborg.dk/el", "has_no_binding": True,
     "has_free_signup": True, "description": "Viborgs lokale energiselskab"},
    {"id": "verdo-variabel", "slug": "verdo", "provider_name": "Verdo",
     "product_name": "Verdo Variabel", "markup": 4.1, "monthly_subscription": 33.0,
     "signup_link": "https://verdo.dk/privat/el", "has_no_binding": True,
     "has_free_signup": True, "description": "Randers energiselskab"},
]

FEE_COLUMNS = ["markup", "green_certificate_fee", "trading_costs", "monthly_subscription"]


class ProviderRepository(BaseRepository):
    """Repository for provider products."""

    def __init__(self, catalogue: Optional[List[Dict[str, Any]]] = None):
        df = pd.DataFrame(catalogue if catalogue is not None else PROVIDER_CATALOGUE)
        for column in FEE_COLUMNS:
            if column not in df.columns:
                df[column] = 0.0
        df[FEE_COLUMNS] = df[FEE_COLUMNS].fillna(0.0).astype(float)
        self._df = df

    def find_all(self) -> pd.DataFrame:
        """Find all provider products."""
        return self._df.copy()

    def find_by_id(self, record_id: Any) -> Optional[pd.Series]:
        """Find a product by id."""
        matches = self._df[self._df['id'] == record_id]
        return matches.iloc[0] if not matches.empty else None

    def count(self) -> int:
        """Count provider products."""
        return len(self._df)
