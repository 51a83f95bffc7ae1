"""
Controller for spot price and provider comparison endpoints.
"""

from datetime import date
from fastapi import Query, HTTPException, Depends
from typing import Optional

from .base_controller import BaseController
from ..services import ProviderRankingService, SpotPriceService
from ..models import RankedProvidersResponse, SpotPricesResponse


def get_spot_price_service() -> SpotPriceService:
    """Dependency injection for SpotPriceService."""
    return SpotPriceService()


def get_provider_ranking_service() -> ProviderRankingService:
    """Dependency injection for ProviderRankingService."""
    return ProviderRankingService()


class ProviderController(BaseController):
    """Controller for spot prices and the provider comparison table."""

    def _setup_routes(self):
        """Setup routes for spot prices and provider ranking."""

        @self.router.get(
            "/spot-prices",
            response_model=SpotPricesResponse,
            tags=["Spot Prices"],
            summary="Hourly day-ahead spot prices"
        )
        def get_spot_prices(
            area: str = Query("DK2", description="Price area: DK1 or DK2"),
            day: Optional[date] = Query(
                None, alias="date", description="Start date (YYYY-MM-DD), defaults to today"),
            end_date: Optional[date] = Query(
                None, description="Optional end date (YYYY-MM-DD), inclusive"),
            service: SpotPriceService = Depends(get_spot_price_service)
        ):
            try:
                return service.get_spot_prices(area, day, end_date)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving spot prices")

        @self.router.get(
            "/providers/ranked",
            response_model=RankedProvidersResponse,
            tags=["Provider Comparison"],
            summary="Providers ranked by monthly cost",
            description="""
            Price every provider product with the current spot price and the
            grid operator's network tariff. The pinned brand is always listed
            first; the rest follow by ascending monthly cost, ties by name.
            """
        )
        def get_ranked_providers(
            annual_consumption_kwh: Optional[float] = Query(
                None, ge=0, description="Annual consumption in kWh (default 4000)"),
            area: Optional[str] = Query(None, description="Price area: DK1 or DK2"),
            operator_id: Optional[str] = Query(
                None, description="Grid operator GLN or DSO code"),
            spot_price: Optional[float] = Query(
                None, description="Override the spot price (kr/kWh)"),
            service: ProviderRankingService = Depends(get_provider_ranking_service)
        ):
            try:
                return service.get_ranked_providers(
                    annual_consumption_kwh=annual_consumption_kwh,
                    area=area,
                    operator_id=operator_id,
                    spot_price=spot_price
                )
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error ranking providers")
