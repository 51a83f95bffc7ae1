"""
Service for ranking provider products by what they cost the consumer.

Ranking policy: products of the pinned brand always come first, regardless
of price. All other products follow in ascending monthly cost, ties broken
by provider name and then product name.
"""

from typing import Any, Callable, List, Optional, Tuple
import pandas as pd
from fastapi import HTTPException

from .base_service import BaseService
from .price_calculation_service import (
    compute_price_per_kwh,
    compute_monthly_cost,
    compute_annual_cost,
    flat_monthly_fees
)
from .network_tariff_service import NetworkTariffService
from .spot_price_service import SpotPriceService
from ..config import app_config, RegulatoryFees
from ..repositories import ProviderRepository
from ..models import (
    KrPerKwh,
    ProviderFeeSet,
    ProviderProduct,
    RankedProvider,
    RankedProvidersResponse,
    kr
)


def _optional(value: Any) -> Any:
    return None if value is None or pd.isna(value) else value


def ranking_key(pinned_brand: Optional[str]) -> Callable[[RankedProvider], Tuple]:
    """Sort key putting the pinned brand first, then cheapest monthly cost."""
    def key(provider: RankedProvider) -> Tuple:
        pinned = pinned_brand is not None and provider.provider_name == pinned_brand
        return (0 if pinned else 1, provider.monthly_cost,
                provider.provider_name, provider.product_name)
    return key


def rank_providers(
    products: List[ProviderProduct],
    spot_price: KrPerKwh,
    network_tariff: KrPerKwh,
    annual_consumption_kwh: float,
    regulatory_fees: RegulatoryFees,
    pinned_brand: Optional[str] = None,
) -> List[RankedProvider]:
    """Price every product with the calculator and return them in ranked order."""
    priced = []
    for product in products:
        price_per_kwh = compute_price_per_kwh(
            spot_price, product.fees, network_tariff, regulatory_fees)
        subscription = product.fees.monthly_subscription
        priced.append(RankedProvider(
            rank=0,
            id=product.id,
            provider_name=product.provider_name,
            product_name=product.product_name,
            is_pinned=pinned_brand is not None and product.provider_name == pinned_brand,
            price_per_kwh=price_per_kwh,
            monthly_cost=compute_monthly_cost(
                price_per_kwh, annual_consumption_kwh,
                flat_monthly_fees(subscription, regulatory_fees)),
            annual_cost=compute_annual_cost(
                price_per_kwh, annual_consumption_kwh, subscription, regulatory_fees),
            monthly_subscription=subscription
        ))

    ranked = sorted(priced, key=ranking_key(pinned_brand))
    return [provider.model_copy(update={"rank": position})
            for position, provider in enumerate(ranked, start=1)]


class ProviderRankingService(BaseService):
    """Service for the provider comparison table."""

    def __init__(self, repository: ProviderRepository = None,
                 spot_price_service: SpotPriceService = None,
                 tariff_service: NetworkTariffService = None,
                 regulatory_fees: RegulatoryFees = None,
                 pinned_brand: Optional[str] = None):
        """Initialize service with repository dependency injection."""
        super().__init__(repository or ProviderRepository())
        self.spot_price_service = spot_price_service or SpotPriceService()
        self.tariff_service = tariff_service or NetworkTariffService()
        self.regulatory_fees = regulatory_fees or app_config.regulatory
        self.pinned_brand = pinned_brand or app_config.pricing.pinned_provider_brand

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for ranking queries."""
        annual = kwargs.get('annual_consumption_kwh')

        if annual is not None and (annual < 0 or annual > 1_000_000):
            raise HTTPException(
                status_code=400,
                detail="Annual consumption must be between 0 and 1,000,000 kWh")

        return True

    def get_products(self) -> List[ProviderProduct]:
        """Provider products from the catalogue."""
        df = self.repository.find_all()

        products = []
        for _, row in df.iterrows():
            products.append(ProviderProduct(
                id=row['id'],
                slug=row['slug'],
                provider_name=row['provider_name'],
                product_name=row['product_name'],
                fees=ProviderFeeSet.from_ore(
                    markup=float(row['markup']),
                    green_certificate_fee=float(row['green_certificate_fee']),
                    trading_costs=float(row['trading_costs']),
                    monthly_subscription=float(row['monthly_subscription'])),
                signup_link=_optional(row.get('signup_link')),
                has_no_binding=bool(row.get('has_no_binding', True)),
                has_free_signup=bool(row.get('has_free_signup', True)),
                description=_optional(row.get('description'))
            ))

        return products

    def get_ranked_providers(
        self,
        annual_consumption_kwh: float = None,
        area: str = None,
        operator_id: Optional[str] = None,
        spot_price: Optional[float] = None,
    ) -> RankedProvidersResponse:
        """Ranked comparison for a consumption estimate and location."""
        annual_consumption_kwh = (annual_consumption_kwh if annual_consumption_kwh is not None
                                  else app_config.pricing.default_annual_consumption_kwh)
        area = area or app_config.pricing.default_price_area

        try:
            self.validate_input(annual_consumption_kwh=annual_consumption_kwh)

            spot = (kr(spot_price) if spot_price is not None
                    else self.spot_price_service.get_current_spot_price(area))
            if operator_id:
                tariff = self.tariff_service.get_network_tariff(operator_id)
            else:
                tariff = self.tariff_service.default_tariff("unknown")

            ranked = rank_providers(
                self.get_products(),
                spot,
                kr(tariff.rate),
                annual_consumption_kwh,
                self.regulatory_fees,
                self.pinned_brand
            )

            return RankedProvidersResponse(
                spot_price=spot.amount,
                network_tariff=tariff,
                annual_consumption_kwh=annual_consumption_kwh,
                providers=ranked,
                count=len(ranked)
            )

        except HTTPException:
            raise
        except Exception as e:
            self.handle_exception(e, "Error ranking providers")
