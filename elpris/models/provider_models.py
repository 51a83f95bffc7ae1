"""
Models for electricity providers and their ranked comparison.
"""

from pydantic import BaseModel
from typing import Optional

from .price_models import ProviderFeeSet


class ProviderProduct(BaseModel):
    """A provider's product as shown in the comparison table."""
    id: str
    slug: str
    provider_name: str
    product_name: str
    fees: ProviderFeeSet
    signup_link: Optional[str] = None
    is_variable_price: bool = True
    has_no_binding: bool = True
    has_free_signup: bool = True
    description: Optional[str] = None


class RankedProvider(BaseModel):
    """Provider product with computed prices, in ranked order."""
    rank: int
    id: str
    provider_name: str
    product_name: str
    is_pinned: bool
    price_per_kwh: float  # kr/kWh incl. VAT
    monthly_cost: float  # kr/month
    annual_cost: float  # kr/year
    monthly_subscription: float
