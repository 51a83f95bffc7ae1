"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository, EnergiDataServiceRepository, build_session
from .exceptions import UpstreamDataError, TariffLookupError, SpotPriceFetchError
from .grid_provider_repository import GridProviderRepository, GRID_PROVIDERS, FALLBACK_TARIFFS
from .datahub_pricelist_repository import DatahubPricelistRepository
from .spot_price_repository import SpotPriceRepository, PRICE_AREAS
from .provider_repository import ProviderRepository, PROVIDER_CATALOGUE

__all__ = [
    "BaseRepository",
    "EnergiDataServiceRepository",
    "build_session",
    "UpstreamDataError",
    "TariffLookupError",
    "SpotPriceFetchError",
    "GridProviderRepository",
    "GRID_PROVIDERS",
    "FALLBACK_TARIFFS",
    "DatahubPricelistRepository",
    "SpotPriceRepository",
    "PRICE_AREAS",
    "ProviderRepository",
    "PROVIDER_CATALOGUE"
]
