"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController
from .price_controller import PriceController, get_price_calculation_service
from .tariff_controller import TariffController, get_network_tariff_service
from .provider_controller import (
    ProviderController,
    get_spot_price_service,
    get_provider_ranking_service
)


class ElprisController:
    """Aggregate controller that mounts every controller's routes."""

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        self.info_controller = InfoController()
        self.price_controller = PriceController()
        self.tariff_controller = TariffController()
        self.provider_controller = ProviderController()

        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Include all individual controller routers."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.price_controller.router)
        self.router.include_router(self.tariff_controller.router)
        self.router.include_router(self.provider_controller.router)


__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "PriceController",
    "TariffController",
    "ProviderController",

    # Aggregate controller
    "ElprisController",

    # Dependencies
    "get_price_calculation_service",
    "get_network_tariff_service",
    "get_spot_price_service",
    "get_provider_ranking_service"
]
