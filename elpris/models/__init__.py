"""
Models package for API data structures.
Imports all models for easy access.
"""

# Price models
from .price_models import (
    KrPerKwh,
    OrePerKwh,
    kr,
    ore,
    ProviderFeeSet,
    PriceBreakdown,
    TariffPeriod,
    SpotPrice
)

# Tariff models
from .tariff_models import (
    GridProvider,
    TariffData,
    TariffPeriodRate,
    TariffPeriods,
    TariffPeriodsResponse,
    TariffLookupFailure,
    TariffLookupResult,
    NetworkTariff
)

# Provider models
from .provider_models import ProviderProduct, RankedProvider

# Request/response models
from .response_models import (
    PriceCalculationRequest,
    PriceCalculationResponse,
    PriceBreakdownResponse,
    MonthlyCostResponse,
    SpotPricesResponse,
    RankedProvidersResponse,
    APIInfo,
    HealthResponse
)

__all__ = [
    # Price models
    "KrPerKwh",
    "OrePerKwh",
    "kr",
    "ore",
    "ProviderFeeSet",
    "PriceBreakdown",
    "TariffPeriod",
    "SpotPrice",

    # Tariff models
    "GridProvider",
    "TariffData",
    "TariffPeriodRate",
    "TariffPeriods",
    "TariffPeriodsResponse",
    "TariffLookupFailure",
    "TariffLookupResult",
    "NetworkTariff",

    # Provider models
    "ProviderProduct",
    "RankedProvider",

    # Request/response models
    "PriceCalculationRequest",
    "PriceCalculationResponse",
    "PriceBreakdownResponse",
    "MonthlyCostResponse",
    "SpotPricesResponse",
    "RankedProvidersResponse",
    "APIInfo",
    "HealthResponse"
]
