"""
Configuration package for application settings.
"""

from .settings import (
    ApplicationConfig,
    APIConfig,
    PricingConfig,
    RegulatoryFees,
    EnergiDataServiceConfig,
    load_regulatory_fees,
    app_config,
)

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "PricingConfig",
    "RegulatoryFees",
    "EnergiDataServiceConfig",
    "load_regulatory_fees",
    "app_config",
]
