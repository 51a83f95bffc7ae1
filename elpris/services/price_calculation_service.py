"""
Danish electricity price composition.

All prices are in kroner per kWh unless stated otherwise. A consumer price is
composed of:

1. Spot price - day-ahead market price (kr/kWh)
2. Provider markup, green certificates, trading costs - øre/kWh from the CMS
3. Network tariff - grid operator fee (kr/kWh), varies by operator
4. System tariff, transmission fee, electricity tax - national constants
5. VAT - applied to the sum of everything above

The module-level functions are pure: no I/O, no validation, no rounding.
NaN or negative inputs propagate into the result unchanged.
"""

from typing import Optional
from fastapi import HTTPException

from .base_service import BaseService
from .network_tariff_service import NetworkTariffService
from ..config import app_config, RegulatoryFees
from ..utils import danish_now
from ..models import (
    KrPerKwh,
    ProviderFeeSet,
    PriceBreakdown,
    TariffPeriod,
    NetworkTariff,
    PriceCalculationRequest,
    PriceCalculationResponse,
    PriceBreakdownResponse,
    MonthlyCostResponse,
    kr
)

MONTHS_PER_YEAR = 12


def _require_kr_per_kwh(value, name: str) -> KrPerKwh:
    if not isinstance(value, KrPerKwh):
        raise TypeError(
            f"{name} must be KrPerKwh, got {type(value).__name__}")
    return value


def compute_price_before_vat(
    spot_price: KrPerKwh,
    provider_fees: ProviderFeeSet,
    network_tariff: KrPerKwh,
    regulatory_fees: RegulatoryFees,
) -> float:
    """Sum of all per-kWh components in kr/kWh, before VAT."""
    spot_price = _require_kr_per_kwh(spot_price, "spot_price")
    network_tariff = _require_kr_per_kwh(network_tariff, "network_tariff")

    markup = provider_fees.markup.to_kr_per_kwh().amount
    green_certificates = provider_fees.green_certificate_fee.to_kr_per_kwh().amount
    trading_costs = provider_fees.trading_costs.to_kr_per_kwh().amount

    return (
        spot_price.amount
        + markup
        + green_certificates
        + trading_costs
        + network_tariff.amount
        + regulatory_fees.system_tariff
        + regulatory_fees.electricity_tax
        + regulatory_fees.transmission_fee
    )


def compute_price_per_kwh(
    spot_price: KrPerKwh,
    provider_fees: ProviderFeeSet,
    network_tariff: KrPerKwh,
    regulatory_fees: RegulatoryFees,
) -> float:
    """
    Final consumer price per kWh including VAT.

    Args:
        spot_price: Spot price before tax
        provider_fees: Provider add-ons in øre/kWh
        network_tariff: Grid operator tariff, already resolved by the caller
        regulatory_fees: National fees and VAT rate

    Returns:
        float: Price in kr/kWh incl. VAT, unrounded
    """
    price_before_vat = compute_price_before_vat(
        spot_price, provider_fees, network_tariff, regulatory_fees)
    return price_before_vat * (1 + regulatory_fees.vat_rate)


def compute_monthly_cost(price_per_kwh: float, annual_consumption_kwh: float,
                         flat_monthly_fees: float) -> float:
    """Monthly cost in kr for a yearly consumption spread evenly over 12 months."""
    return price_per_kwh * (annual_consumption_kwh / MONTHS_PER_YEAR) + flat_monthly_fees


def flat_monthly_fees(monthly_subscription: float, regulatory_fees: RegulatoryFees) -> float:
    """Provider subscription plus the pro-rated annual system charge."""
    return monthly_subscription + regulatory_fees.system_tariff_annual / MONTHS_PER_YEAR


def compute_annual_cost(price_per_kwh: float, annual_consumption_kwh: float,
                        monthly_subscription: float,
                        regulatory_fees: RegulatoryFees) -> float:
    return (price_per_kwh * annual_consumption_kwh
            + monthly_subscription * MONTHS_PER_YEAR
            + regulatory_fees.system_tariff_annual)


def get_price_breakdown(
    spot_price: KrPerKwh,
    provider_fees: ProviderFeeSet,
    network_tariff: KrPerKwh,
    regulatory_fees: RegulatoryFees,
) -> PriceBreakdown:
    """Every price component in kr/kWh, for transparency in the UI."""
    spot_price = _require_kr_per_kwh(spot_price, "spot_price")
    network_tariff = _require_kr_per_kwh(network_tariff, "network_tariff")

    markup = provider_fees.markup.to_kr_per_kwh().amount
    green_certificates = provider_fees.green_certificate_fee.to_kr_per_kwh().amount
    trading_costs = provider_fees.trading_costs.to_kr_per_kwh().amount

    network_fees = (network_tariff.amount
                    + regulatory_fees.system_tariff
                    + regulatory_fees.transmission_fee)
    subtotal = (spot_price.amount + markup + green_certificates + trading_costs
                + network_fees + regulatory_fees.electricity_tax)
    vat_amount = subtotal * regulatory_fees.vat_rate

    return PriceBreakdown(
        spot_price=spot_price.amount,
        provider_markup=markup,
        green_certificates=green_certificates,
        trading_costs=trading_costs,
        network_tariff=network_tariff.amount,
        system_tariff=regulatory_fees.system_tariff,
        transmission_fee=regulatory_fees.transmission_fee,
        electricity_tax=regulatory_fees.electricity_tax,
        network_fees=network_fees,
        subtotal=subtotal,
        vat_amount=vat_amount,
        total=subtotal + vat_amount
    )


def get_tariff_period(hour: Optional[int] = None) -> TariffPeriod:
    """Classify an hour of the day, by default the current Danish hour, into a tariff period."""
    if hour is None:
        hour = danish_now().hour

    if 0 <= hour < 6:
        return TariffPeriod(period="low", name="Lavlast",
                            description="Billigste periode (nat)")
    elif 17 <= hour < 21:
        return TariffPeriod(period="peak", name="Spidslast",
                            description="Dyreste periode (aften)")
    return TariffPeriod(period="high", name="Højlast",
                        description="Normal periode (dag)")


def format_price(amount: float) -> str:
    return f"{amount:.2f} kr."


def format_consumption(kwh: float) -> str:
    """Format kWh with Danish separators, e.g. 4000 -> '4.000 kWh'."""
    text = f"{kwh:,.2f}".rstrip("0").rstrip(".")
    return text.translate(str.maketrans({",": ".", ".": ","})) + " kWh"


class PriceCalculationService(BaseService):
    """Service that resolves inputs and runs the price calculation."""

    def __init__(self, tariff_service: NetworkTariffService = None,
                 regulatory_fees: RegulatoryFees = None):
        """Initialize service with its collaborators."""
        super().__init__(None)
        self.tariff_service = tariff_service or NetworkTariffService()
        self.regulatory_fees = regulatory_fees or app_config.regulatory

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for calculations."""
        annual = kwargs.get('annual_consumption_kwh')
        price = kwargs.get('price_per_kwh')

        if annual is not None and annual > 1_000_000:
            raise HTTPException(
                status_code=400,
                detail="Annual consumption cannot exceed 1,000,000 kWh")

        if price is not None and price < 0:
            raise HTTPException(
                status_code=400, detail="Price per kWh cannot be negative")

        return True

    def resolve_network_tariff(self, request: PriceCalculationRequest) -> NetworkTariff:
        """Explicit tariff first, then the operator lookup, then the default."""
        if request.network_tariff is not None:
            return NetworkTariff(
                operator_id=request.operator_id or "manual",
                rate=request.network_tariff,
                source="manual")
        if request.operator_id:
            return self.tariff_service.get_network_tariff(request.operator_id)
        return self.tariff_service.default_tariff("unknown")

    def calculate(self, request: PriceCalculationRequest) -> PriceCalculationResponse:
        """Price per kWh and, with a consumption estimate, monthly and annual cost."""
        try:
            self.validate_input(annual_consumption_kwh=request.annual_consumption_kwh)

            tariff = self.resolve_network_tariff(request)
            fees = ProviderFeeSet.from_ore(
                markup=request.markup,
                green_certificate_fee=request.green_certificate_fee,
                trading_costs=request.trading_costs,
                monthly_subscription=request.monthly_subscription)

            price_before_vat = compute_price_before_vat(
                kr(request.spot_price), fees, kr(tariff.rate), self.regulatory_fees)
            price_per_kwh = compute_price_per_kwh(
                kr(request.spot_price), fees, kr(tariff.rate), self.regulatory_fees)

            monthly_cost = None
            annual_cost = None
            if request.annual_consumption_kwh is not None:
                monthly_cost = compute_monthly_cost(
                    price_per_kwh,
                    request.annual_consumption_kwh,
                    flat_monthly_fees(fees.monthly_subscription, self.regulatory_fees))
                annual_cost = compute_annual_cost(
                    price_per_kwh,
                    request.annual_consumption_kwh,
                    fees.monthly_subscription,
                    self.regulatory_fees)

            return PriceCalculationResponse(
                price_per_kwh=price_per_kwh,
                price_before_vat=price_before_vat,
                network_tariff=tariff,
                monthly_cost=monthly_cost,
                annual_cost=annual_cost,
                formatted_price=format_price(price_per_kwh)
            )

        except HTTPException:
            raise
        except Exception as e:
            self.handle_exception(e, "Error calculating price")

    def breakdown(self, request: PriceCalculationRequest) -> PriceBreakdownResponse:
        """Component-wise breakdown of a price."""
        try:
            tariff = self.resolve_network_tariff(request)
            fees = ProviderFeeSet.from_ore(
                markup=request.markup,
                green_certificate_fee=request.green_certificate_fee,
                trading_costs=request.trading_costs)

            return PriceBreakdownResponse(
                breakdown=get_price_breakdown(
                    kr(request.spot_price), fees, kr(tariff.rate), self.regulatory_fees),
                network_tariff=tariff
            )

        except HTTPException:
            raise
        except Exception as e:
            self.handle_exception(e, "Error building price breakdown")

    def monthly_cost(self, price_per_kwh: float, annual_consumption_kwh: float,
                     monthly_subscription: float = 0.0,
                     include_system_charge: bool = True) -> MonthlyCostResponse:
        """Monthly cost for a known price per kWh."""
        self.validate_input(price_per_kwh=price_per_kwh,
                            annual_consumption_kwh=annual_consumption_kwh)

        if include_system_charge:
            flat_fees = flat_monthly_fees(monthly_subscription, self.regulatory_fees)
        else:
            flat_fees = monthly_subscription

        monthly_cost = compute_monthly_cost(price_per_kwh, annual_consumption_kwh, flat_fees)
        monthly_consumption_kwh = annual_consumption_kwh / MONTHS_PER_YEAR

        return MonthlyCostResponse(
            price_per_kwh=price_per_kwh,
            annual_consumption_kwh=annual_consumption_kwh,
            monthly_consumption_kwh=monthly_consumption_kwh,
            flat_monthly_fees=flat_fees,
            monthly_cost=monthly_cost,
            formatted_monthly_cost=format_price(monthly_cost),
            formatted_consumption=format_consumption(monthly_consumption_kwh)
        )
