"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Individual services
from .network_tariff_service import NetworkTariffService
from .price_calculation_service import (
    PriceCalculationService,
    compute_price_before_vat,
    compute_price_per_kwh,
    compute_monthly_cost,
    compute_annual_cost,
    flat_monthly_fees,
    get_price_breakdown,
    get_tariff_period,
    format_price,
    format_consumption
)
from .spot_price_service import SpotPriceService
from .provider_ranking_service import ProviderRankingService, rank_providers, ranking_key

__all__ = [
    # Base service
    "BaseService",

    # Individual services
    "NetworkTariffService",
    "PriceCalculationService",
    "SpotPriceService",
    "ProviderRankingService",

    # Pure price functions
    "compute_price_before_vat",
    "compute_price_per_kwh",
    "compute_monthly_cost",
    "compute_annual_cost",
    "flat_monthly_fees",
    "get_price_breakdown",
    "get_tariff_period",
    "format_price",
    "format_consumption",

    # Ranking
    "rank_providers",
    "ranking_key"
]
