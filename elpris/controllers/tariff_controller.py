"""
Controller for network tariff and grid operator endpoints.
"""

from fastapi import Query, HTTPException, Depends
from typing import List, Optional

from .base_controller import BaseController
from ..services import NetworkTariffService
from ..models import TariffData, TariffPeriodsResponse, NetworkTariff, GridProvider


def get_network_tariff_service() -> NetworkTariffService:
    """Dependency injection for NetworkTariffService."""
    return NetworkTariffService()


class TariffController(BaseController):
    """Controller for network tariff endpoints."""

    def _setup_routes(self):
        """Setup routes for tariff operations."""

        @self.router.get(
            "/tariffs",
            response_model=TariffData,
            tags=["Network Tariffs"],
            summary="Live network tariff for a grid operator GLN"
        )
        def get_tariff(
            gln: str = Query(..., description="13-digit GLN of the grid operator"),
            charge_code: Optional[str] = Query(
                None, description="Charge type code, defaults to the residential code"),
            service: NetworkTariffService = Depends(get_network_tariff_service)
        ):
            try:
                return service.get_tariff(gln, charge_code)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving tariff")

        @self.router.get(
            "/tariffs/periods",
            response_model=TariffPeriodsResponse,
            tags=["Network Tariffs"],
            summary="Low, high and peak rates of the live tariff"
        )
        def get_tariff_periods(
            gln: str = Query(..., description="13-digit GLN of the grid operator"),
            charge_code: Optional[str] = Query(
                None, description="Charge type code, defaults to the residential code"),
            service: NetworkTariffService = Depends(get_network_tariff_service)
        ):
            try:
                return service.get_tariff_periods(gln, charge_code)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving tariff periods")

        @self.router.get(
            "/tariffs/network-tariff",
            response_model=NetworkTariff,
            tags=["Network Tariffs"],
            summary="Network tariff with static fallback"
        )
        def get_network_tariff(
            operator_id: str = Query(..., description="GLN or DSO code"),
            use_current_hour: bool = Query(
                False, description="Use the current hour's rate instead of the average"),
            service: NetworkTariffService = Depends(get_network_tariff_service)
        ):
            try:
                return service.get_network_tariff(operator_id, use_current_hour=use_current_hour)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error resolving network tariff")

        @self.router.get(
            "/grid-providers",
            response_model=List[GridProvider],
            tags=["Network Tariffs"],
            summary="Grid operators from the static table"
        )
        def get_grid_providers(
            municipality: Optional[str] = Query(
                None, description="Only operators serving this municipality"),
            service: NetworkTariffService = Depends(get_network_tariff_service)
        ):
            try:
                return service.get_grid_providers(municipality)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving grid providers")
