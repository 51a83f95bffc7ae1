"""
Application configuration settings.
Spring Boot-like configuration management.

Regulatory constants change by government policy, so every value in
RegulatoryFees can be overridden from the environment (ELPRIS_*) without
touching the code.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load ELPRIS_* overrides from a .env file next to the package, then the cwd
load_dotenv(Path(__file__).parent.parent.parent / ".env")
load_dotenv()


class RegulatoryFees(BaseModel):
    """Nationally uniform fees in kr/kWh, plus the VAT rate."""

    model_config = ConfigDict(frozen=True)

    system_tariff: float = 0.19  # Systemtarif (Energinet)
    transmission_fee: float = 0.11  # Nettarif transmission (Energinet)
    electricity_tax: float = 0.90  # Elafgift
    vat_rate: float = 0.25  # Moms
    system_tariff_annual: float = 180.0  # kr/year subscription


class PricingConfig(BaseModel):
    """Defaults used when live data is unavailable."""

    default_network_tariff: float = 0.30  # kr/kWh, national average
    default_spot_price: float = 1.00  # kr/kWh
    default_annual_consumption_kwh: float = 4000.0
    default_price_area: str = "DK2"
    pinned_provider_brand: str = "Vindstød"


class EnergiDataServiceConfig(BaseModel):
    """EnergiDataService endpoints and client behaviour."""

    base_url: str = "https://api.energidataservice.dk/dataset"
    tariff_timeout_seconds: float = 5.0
    spot_price_timeout_seconds: float = 10.0
    tariff_cache_ttl_seconds: int = 24 * 60 * 60
    spot_price_cache_ttl_seconds: int = 5 * 60
    spot_price_cache_size: int = 100
    max_retries: int = 3
    retry_backoff_factor: float = 1.0
    default_charge_code: str = "DT_C_01"

    @property
    def pricelist_url(self) -> str:
        return f"{self.base_url}/DatahubPricelist"

    @property
    def spot_prices_url(self) -> str:
        return f"{self.base_url}/Elspotprices"


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "Elpris Beregner API"
    description: str = "REST API for composing Danish consumer electricity prices and comparing providers"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to the default."""
    raw: Optional[str] = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def load_regulatory_fees() -> RegulatoryFees:
    """Build RegulatoryFees from defaults and ELPRIS_* overrides."""
    defaults = RegulatoryFees()
    return RegulatoryFees(
        system_tariff=_env_float(
            "ELPRIS_SYSTEM_TARIFF", defaults.system_tariff),
        transmission_fee=_env_float(
            "ELPRIS_TRANSMISSION_FEE", defaults.transmission_fee),
        electricity_tax=_env_float(
            "ELPRIS_ELECTRICITY_TAX", defaults.electricity_tax),
        vat_rate=_env_float("ELPRIS_VAT_RATE", defaults.vat_rate),
        system_tariff_annual=_env_float(
            "ELPRIS_SYSTEM_TARIFF_ANNUAL", defaults.system_tariff_annual),
    )


class ApplicationConfig:
    """Main application configuration."""

    def __init__(self):
        self.api = APIConfig()
        self.pricing = PricingConfig(
            default_network_tariff=_env_float(
                "ELPRIS_DEFAULT_NETWORK_TARIFF", PricingConfig().default_network_tariff),
            pinned_provider_brand=os.environ.get(
                "ELPRIS_PINNED_PROVIDER", PricingConfig().pinned_provider_brand),
        )
        self.regulatory = load_regulatory_fees()
        self.energi_data_service = EnergiDataServiceConfig()

    def reload_regulatory_fees(self) -> RegulatoryFees:
        """Re-read regulatory fees from the environment."""
        self.regulatory = load_regulatory_fees()
        return self.regulatory

    @property
    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.api.debug


# Global configuration instance
app_config = ApplicationConfig()
