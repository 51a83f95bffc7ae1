"""
Domain models for electricity price composition.

Per-kWh quantities come in two units: kr/kWh (spot price, network tariff,
regulatory fees) and øre/kWh (provider fees from the CMS). They are kept
as distinct types so the øre -> kr conversion has to be called explicitly.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class KrPerKwh(BaseModel):
    """Amount in kroner per kWh."""
    model_config = ConfigDict(frozen=True)

    amount: float = 0.0


class OrePerKwh(BaseModel):
    """Amount in øre (1/100 kr) per kWh."""
    model_config = ConfigDict(frozen=True)

    amount: float = 0.0

    def to_kr_per_kwh(self) -> KrPerKwh:
        """Convert to kr/kWh."""
        return KrPerKwh(amount=self.amount / 100)


def kr(amount: float) -> KrPerKwh:
    return KrPerKwh(amount=amount)


def ore(amount: float) -> OrePerKwh:
    return OrePerKwh(amount=amount)


class ProviderFeeSet(BaseModel):
    """Provider-specific add-ons. Per-kWh fees in øre, subscription in kr/month."""
    model_config = ConfigDict(frozen=True)

    markup: OrePerKwh = Field(default_factory=OrePerKwh)
    green_certificate_fee: OrePerKwh = Field(default_factory=OrePerKwh)
    trading_costs: OrePerKwh = Field(default_factory=OrePerKwh)
    monthly_subscription: float = 0.0

    @classmethod
    def from_ore(
        cls,
        markup: Optional[float] = None,
        green_certificate_fee: Optional[float] = None,
        trading_costs: Optional[float] = None,
        monthly_subscription: Optional[float] = None,
    ) -> "ProviderFeeSet":
        """Build a fee set from raw øre values, treating missing fields as zero."""
        return cls(
            markup=ore(markup or 0.0),
            green_certificate_fee=ore(green_certificate_fee or 0.0),
            trading_costs=ore(trading_costs or 0.0),
            monthly_subscription=monthly_subscription or 0.0,
        )


class PriceBreakdown(BaseModel):
    """Every component of a consumer price in kr/kWh."""
    spot_price: float
    provider_markup: float
    green_certificates: float
    trading_costs: float
    network_tariff: float
    system_tariff: float
    transmission_fee: float
    electricity_tax: float
    network_fees: float  # network + system + transmission
    subtotal: float
    vat_amount: float
    total: float


class TariffPeriod(BaseModel):
    """Time-of-day tariff period."""
    period: str  # "low", "high" or "peak"
    name: str
    description: str


class SpotPrice(BaseModel):
    """Day-ahead spot price for one region and hour."""
    region: str
    hour_utc: str
    hour_dk: str
    spot_price_kr_kwh: float
    spot_price_dkk_mwh: float

    def as_kr_per_kwh(self) -> KrPerKwh:
        return kr(self.spot_price_kr_kwh)
