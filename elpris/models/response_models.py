"""
Request and response models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from .price_models import PriceBreakdown, SpotPrice
from .provider_models import RankedProvider
from .tariff_models import NetworkTariff


class PriceCalculationRequest(BaseModel):
    """Inputs for a price calculation. Provider fees in øre/kWh."""
    spot_price: float = Field(
        ..., allow_inf_nan=False, description="Spot price in kr/kWh (may be negative)")
    markup: float = Field(0.0, ge=0, allow_inf_nan=False,
                          description="Spot price markup in øre/kWh")
    green_certificate_fee: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Green certificate fee in øre/kWh")
    trading_costs: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Trading costs in øre/kWh")
    monthly_subscription: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Subscription in kr/month")
    network_tariff: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False,
        description="Network tariff in kr/kWh; resolved from operator_id when omitted")
    operator_id: Optional[str] = Field(
        None, description="Grid operator GLN or DSO code")
    annual_consumption_kwh: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Annual consumption in kWh")


class PriceCalculationResponse(BaseModel):
    price_per_kwh: float
    price_before_vat: float
    network_tariff: NetworkTariff
    monthly_cost: Optional[float] = None
    annual_cost: Optional[float] = None
    formatted_price: str


class PriceBreakdownResponse(BaseModel):
    breakdown: PriceBreakdown
    network_tariff: NetworkTariff


class MonthlyCostResponse(BaseModel):
    price_per_kwh: float
    annual_consumption_kwh: float
    monthly_consumption_kwh: float
    flat_monthly_fees: float
    monthly_cost: float
    formatted_monthly_cost: str
    formatted_consumption: str


class SpotPricesResponse(BaseModel):
    area: str
    date: str
    prices: List[SpotPrice]
    count: int


class RankedProvidersResponse(BaseModel):
    spot_price: float
    network_tariff: NetworkTariff
    annual_consumption_kwh: float
    providers: List[RankedProvider]
    count: int


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str
