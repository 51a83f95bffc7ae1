"""
Controller for API information and health endpoints.
"""

from .base_controller import BaseController
from ..config import app_config
from ..models import APIInfo, HealthResponse


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info():
            """API root endpoint with basic information."""
            return APIInfo(
                message="Elpris Beregner API",
                version=app_config.api.version,
                endpoints={
                    "calculate": "/price/calculate - Price per kWh incl. VAT",
                    "breakdown": "/price/breakdown - Price components",
                    "monthly_cost": "/price/monthly-cost - Monthly cost projection",
                    "regulatory_fees": "/price/regulatory-fees - Active national fees",
                    "tariff_period": "/price/tariff-period - Low, high or peak period for an hour",
                    "tariffs": "/tariffs - Live network tariff for a GLN",
                    "tariff_periods": "/tariffs/periods - Live rate per tariff period",
                    "network_tariff": "/tariffs/network-tariff - Resolved tariff with fallback",
                    "grid_providers": "/grid-providers - Grid operators",
                    "spot_prices": "/spot-prices - Day-ahead spot prices",
                    "ranked_providers": "/providers/ranked - Provider comparison",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="elpris-api"
            )
