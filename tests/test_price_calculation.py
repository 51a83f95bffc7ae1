import math

import pytest
from pydantic import ValidationError

from elpris.config import RegulatoryFees, load_regulatory_fees
from elpris.models import ProviderFeeSet, kr, ore
from elpris.services import (
    compute_price_before_vat,
    compute_price_per_kwh,
    compute_monthly_cost,
    compute_annual_cost,
    flat_monthly_fees,
    get_price_breakdown,
    get_tariff_period,
    format_price,
    format_consumption,
)


def test_ore_converts_by_exactly_one_hundred():
    for value in (0.0, 4.0, 13.21, 3.75, 1234.5):
        assert ore(value).to_kr_per_kwh().amount == value / 100


def test_zero_fee_baseline(regulatory_fees):
    price = compute_price_per_kwh(
        kr(1.0), ProviderFeeSet(), kr(0.30), regulatory_fees)
    assert price == pytest.approx(3.125)


def test_copenhagen_scenario(regulatory_fees):
    fees = ProviderFeeSet.from_ore(markup=13.21)
    before_vat = compute_price_before_vat(kr(1.00), fees, kr(0.217), regulatory_fees)
    price = compute_price_per_kwh(kr(1.00), fees, kr(0.217), regulatory_fees)

    assert before_vat == pytest.approx(2.5491)
    assert price == pytest.approx(3.186375)


def test_vat_is_applied_to_full_sum(regulatory_fees):
    fees = ProviderFeeSet.from_ore(markup=4, green_certificate_fee=15, trading_costs=3.75)
    before_vat = compute_price_before_vat(kr(0.87), fees, kr(0.236), regulatory_fees)
    price = compute_price_per_kwh(kr(0.87), fees, kr(0.236), regulatory_fees)
    assert price == before_vat * 1.25


def test_provider_fee_contribution_is_divided_by_hundred(regulatory_fees):
    base = compute_price_before_vat(kr(1.0), ProviderFeeSet(), kr(0.30), regulatory_fees)
    with_markup = compute_price_before_vat(
        kr(1.0), ProviderFeeSet.from_ore(markup=20), kr(0.30), regulatory_fees)
    assert with_markup - base == pytest.approx(0.20)


@pytest.mark.parametrize("field", ["markup", "green_certificate_fee", "trading_costs"])
def test_increasing_provider_fee_increases_price(regulatory_fees, field):
    low = ProviderFeeSet.from_ore(**{field: 2.0})
    high = ProviderFeeSet.from_ore(**{field: 2.5})
    assert (compute_price_per_kwh(kr(1.0), high, kr(0.3), regulatory_fees)
            > compute_price_per_kwh(kr(1.0), low, kr(0.3), regulatory_fees))


def test_increasing_spot_or_network_tariff_increases_price(regulatory_fees):
    fees = ProviderFeeSet.from_ore(markup=5)
    base = compute_price_per_kwh(kr(1.0), fees, kr(0.3), regulatory_fees)
    assert compute_price_per_kwh(kr(1.01), fees, kr(0.3), regulatory_fees) > base
    assert compute_price_per_kwh(kr(1.0), fees, kr(0.31), regulatory_fees) > base


@pytest.mark.parametrize("field", ["system_tariff", "transmission_fee", "electricity_tax"])
def test_increasing_regulatory_fee_increases_price(field):
    base_fees = RegulatoryFees()
    raised = base_fees.model_copy(update={field: getattr(base_fees, field) + 0.01})
    fees = ProviderFeeSet()
    assert (compute_price_per_kwh(kr(1.0), fees, kr(0.3), raised)
            > compute_price_per_kwh(kr(1.0), fees, kr(0.3), base_fees))


def test_calculation_is_deterministic(regulatory_fees):
    fees = ProviderFeeSet.from_ore(markup=13.21, green_certificate_fee=1.1, trading_costs=0.7)
    first = compute_price_per_kwh(kr(0.8123), fees, kr(0.217), regulatory_fees)
    second = compute_price_per_kwh(kr(0.8123), fees, kr(0.217), regulatory_fees)
    assert first == second


def test_nan_propagates(regulatory_fees):
    price = compute_price_per_kwh(kr(float("nan")), ProviderFeeSet(), kr(0.3), regulatory_fees)
    assert math.isnan(price)


def test_negative_spot_price_is_not_rejected(regulatory_fees):
    price = compute_price_per_kwh(kr(-0.1), ProviderFeeSet(), kr(0.3), regulatory_fees)
    assert price == pytest.approx((-0.1 + 0.3 + 0.19 + 0.90 + 0.11) * 1.25)


def test_plain_floats_are_rejected(regulatory_fees):
    with pytest.raises(TypeError):
        compute_price_per_kwh(1.0, ProviderFeeSet(), kr(0.3), regulatory_fees)
    with pytest.raises(TypeError):
        compute_price_per_kwh(kr(1.0), ProviderFeeSet(), 0.3, regulatory_fees)


def test_missing_fee_fields_default_to_zero():
    fees = ProviderFeeSet.from_ore(markup=None, trading_costs=None)
    assert fees.markup.amount == 0.0
    assert fees.green_certificate_fee.amount == 0.0
    assert fees.trading_costs.amount == 0.0
    assert fees.monthly_subscription == 0.0


@pytest.mark.parametrize("price", [0.0, 1.0, 3.186375, 2.7])
def test_monthly_cost_scales_with_consumption(price):
    assert compute_monthly_cost(price, 12000, 0) == price * 1000


def test_monthly_cost_adds_flat_fees(regulatory_fees):
    flat = flat_monthly_fees(1.0, regulatory_fees)
    assert flat == 16.0
    assert compute_monthly_cost(3.0, 4000, flat) == pytest.approx(3.0 * 4000 / 12 + 16.0)


def test_provider_with_all_fees_and_subscription(regulatory_fees):
    fees = ProviderFeeSet.from_ore(
        markup=4, green_certificate_fee=15, trading_costs=3.75, monthly_subscription=1)
    price = compute_price_per_kwh(kr(1.0), fees, kr(0.30), regulatory_fees)
    monthly = compute_monthly_cost(
        price, 4000, flat_monthly_fees(fees.monthly_subscription, regulatory_fees))

    assert price == pytest.approx(3.409375)
    assert monthly == pytest.approx(3.409375 * 4000 / 12 + 1 + 15)


def test_annual_cost(regulatory_fees):
    assert compute_annual_cost(3.0, 4000, 39, regulatory_fees) == pytest.approx(
        12000 + 39 * 12 + 180)


def test_breakdown_components(regulatory_fees):
    fees = ProviderFeeSet.from_ore(markup=13.21)
    breakdown = get_price_breakdown(kr(1.0), fees, kr(0.217), regulatory_fees)

    assert breakdown.provider_markup == pytest.approx(0.1321)
    assert breakdown.network_fees == pytest.approx(0.217 + 0.19 + 0.11)
    assert breakdown.subtotal == pytest.approx(2.5491)
    assert breakdown.vat_amount == pytest.approx(2.5491 * 0.25)
    assert breakdown.total == pytest.approx(
        compute_price_per_kwh(kr(1.0), fees, kr(0.217), regulatory_fees))


@pytest.mark.parametrize("hour, period", [
    (0, "low"), (5, "low"), (6, "high"), (16, "high"),
    (17, "peak"), (20, "peak"), (21, "high"), (23, "high"),
])
def test_tariff_period(hour, period):
    assert get_tariff_period(hour).period == period


def test_formatting():
    assert format_price(3.186375) == "3.19 kr."
    assert format_consumption(4000) == "4.000 kWh"
    assert format_consumption(3333.5) == "3.333,5 kWh"
    assert format_consumption(250) == "250 kWh"


def test_regulatory_fees_are_immutable(regulatory_fees):
    with pytest.raises(ValidationError):
        regulatory_fees.electricity_tax = 0.5


def test_regulatory_fees_read_from_environment(monkeypatch):
    monkeypatch.setenv("ELPRIS_ELECTRICITY_TAX", "0.72")
    monkeypatch.setenv("ELPRIS_VAT_RATE", "")

    fees = load_regulatory_fees()
    assert fees.electricity_tax == 0.72
    assert fees.vat_rate == 0.25
    assert fees.system_tariff == 0.19
