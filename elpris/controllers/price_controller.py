"""
Controller for price calculation endpoints.

Endpoints:
    - POST /price/calculate: Price per kWh incl. VAT, optional cost projection
    - POST /price/breakdown: Every price component
    - GET /price/monthly-cost: Monthly cost for a known price
    - GET /price/regulatory-fees: Active national fees
    - GET /price/tariff-period: Tariff period for an hour of the day
"""

from fastapi import Query, HTTPException, Depends
from typing import Optional

from .base_controller import BaseController
from ..config import app_config, RegulatoryFees
from ..services import PriceCalculationService, NetworkTariffService, get_tariff_period
from ..models import (
    PriceCalculationRequest,
    PriceCalculationResponse,
    PriceBreakdownResponse,
    MonthlyCostResponse,
    TariffPeriod
)


def get_price_calculation_service() -> PriceCalculationService:
    """Dependency injection for PriceCalculationService."""
    return PriceCalculationService(NetworkTariffService(), app_config.regulatory)


class PriceController(BaseController):
    """Controller for price calculation endpoints."""

    def _setup_routes(self):
        """Setup routes for price calculations."""

        @self.router.post(
            "/price/calculate",
            response_model=PriceCalculationResponse,
            tags=["Price Calculation"],
            summary="Calculate the consumer price per kWh",
            description="""
            Compose the consumer price from spot price, provider fees (øre/kWh),
            network tariff and national fees, then add VAT.

            The network tariff is taken from the request when given, otherwise
            resolved from `operator_id` (GLN or DSO code) with a static fallback.
            With `annual_consumption_kwh` the monthly and annual cost are included.
            """
        )
        def calculate_price(
            request: PriceCalculationRequest,
            service: PriceCalculationService = Depends(get_price_calculation_service)
        ):
            try:
                return service.calculate(request)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error calculating price")

        @self.router.post(
            "/price/breakdown",
            response_model=PriceBreakdownResponse,
            tags=["Price Calculation"],
            summary="Break a price down into its components"
        )
        def price_breakdown(
            request: PriceCalculationRequest,
            service: PriceCalculationService = Depends(get_price_calculation_service)
        ):
            try:
                return service.breakdown(request)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error building price breakdown")

        @self.router.get(
            "/price/monthly-cost",
            response_model=MonthlyCostResponse,
            tags=["Price Calculation"],
            summary="Project a monthly cost"
        )
        async def monthly_cost(
            price_per_kwh: float = Query(..., description="Price in kr/kWh incl. VAT"),
            annual_consumption_kwh: float = Query(
                ..., ge=0, description="Annual consumption in kWh"),
            monthly_subscription: float = Query(
                0.0, ge=0, description="Provider subscription in kr/month"),
            include_system_charge: bool = Query(
                True, description="Add the pro-rated annual system charge"),
            service: PriceCalculationService = Depends(get_price_calculation_service)
        ):
            try:
                return service.monthly_cost(
                    price_per_kwh=price_per_kwh,
                    annual_consumption_kwh=annual_consumption_kwh,
                    monthly_subscription=monthly_subscription,
                    include_system_charge=include_system_charge
                )
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error calculating monthly cost")

        @self.router.get(
            "/price/regulatory-fees",
            response_model=RegulatoryFees,
            tags=["Price Calculation"],
            summary="Active national fees and VAT rate"
        )
        async def regulatory_fees():
            return app_config.regulatory

        @self.router.get(
            "/price/tariff-period",
            response_model=TariffPeriod,
            tags=["Price Calculation"],
            summary="Tariff period (low, high, peak) for an hour"
        )
        async def tariff_period(
            hour: Optional[int] = Query(
                None, ge=0, le=23, description="Hour of the day, defaults to the current Danish hour")
        ):
            return get_tariff_period(hour)
