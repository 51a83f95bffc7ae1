import json
from datetime import datetime, timezone

import pandas as pd
import pytest
import requests

from elpris.models import TariffLookupResult
from elpris.repositories import (
    DatahubPricelistRepository,
    GridProviderRepository,
    TariffLookupError,
)
from elpris.repositories import datahub_pricelist_repository
from elpris.services import NetworkTariffService, get_tariff_period
from elpris.services import network_tariff_service, price_calculation_service
from elpris.utils import to_danish_time

from conftest import RADIUS_GLN, N1_GLN


def test_weighted_average_uses_consumption_pattern():
    rates = [0.1] * 6 + [0.2] * 11 + [0.5] * 4 + [0.2] * 3
    average = NetworkTariffService.calculate_weighted_average(rates)
    assert average == pytest.approx(0.1 * 0.25 + 0.2 * 0.60 + 0.5 * 0.15)


def test_process_record_time_of_use(make_record):
    record = pd.Series(make_record(valid_from="2025-04-01T00:00:00"))
    tariff = NetworkTariffService.process_tariff_record(record, RADIUS_GLN)

    assert tariff.provider == "Radius Elnet A/S"
    assert len(tariff.hourly_rates) == 24
    assert tariff.hourly_rates[18] == 0.5
    assert tariff.tariff_type == "time-of-use"
    assert tariff.season == "summer"
    assert tariff.valid_to is None
    assert tariff.average_rate == pytest.approx(0.22)


def test_process_record_flat_winter(make_record):
    record = pd.Series(make_record(low=0.3, high=0.3, peak=0.3,
                                   valid_from="2025-10-01T00:00:00",
                                   valid_to="2026-04-01T00:00:00"))
    tariff = NetworkTariffService.process_tariff_record(record, RADIUS_GLN)

    assert tariff.tariff_type == "flat"
    assert tariff.season == "winter"
    assert tariff.valid_to.month == 4


def test_process_record_missing_prices_become_zero(make_record):
    data = make_record()
    del data["Price24"]
    tariff = NetworkTariffService.process_tariff_record(pd.Series(data), RADIUS_GLN)
    assert tariff.hourly_rates[23] == 0.0


def test_tariff_periods(make_record):
    tariff = NetworkTariffService.process_tariff_record(
        pd.Series(make_record()), RADIUS_GLN)
    periods = NetworkTariffService.tariff_periods(tariff)

    assert periods.low.rate == pytest.approx(0.1)
    assert periods.high.rate == pytest.approx(0.2)
    assert periods.peak.rate == pytest.approx(0.5)
    assert periods.peak.hours == [17, 18, 19, 20]


def test_repository_rejects_invalid_gln_without_request(make_session):
    session = make_session()
    repository = DatahubPricelistRepository(session=session)

    with pytest.raises(TariffLookupError) as excinfo:
        repository.find_tariff_records("12345", "DT_C_01")

    assert excinfo.value.reason == "invalid_gln"
    assert session.calls == []


def test_repository_query_parameters(make_session, make_record):
    session = make_session(records=[make_record()])
    repository = DatahubPricelistRepository(session=session)
    repository.find_tariff_records(RADIUS_GLN, "DT_C_01")

    params = session.calls[0]["params"]
    assert json.loads(params["filter"]) == {
        "ChargeType": "D03", "GLN_Number": RADIUS_GLN, "ChargeTypeCode": "DT_C_01"}
    assert params["sort"] == "ValidFrom desc"
    assert params["limit"] == "10"
    assert session.calls[0]["timeout"] == 5.0


def test_repository_picks_currently_valid_record(make_session, make_record):
    expired = make_record(low=9.0, high=9.0, peak=9.0,
                          valid_from="2019-01-01T00:00:00", valid_to="2020-01-01T00:00:00")
    current = make_record(valid_from="2020-01-01T00:00:00")
    session = make_session(records=[expired, current])

    record = DatahubPricelistRepository(session=session).find_current_record(
        RADIUS_GLN, "DT_C_01")
    assert record["Price1"] == 0.1


def test_repository_no_valid_record(make_session, make_record):
    expired = make_record(valid_from="2019-01-01T00:00:00", valid_to="2020-01-01T00:00:00")
    repository = DatahubPricelistRepository(session=make_session(records=[expired]))

    with pytest.raises(TariffLookupError) as excinfo:
        repository.find_current_record(RADIUS_GLN, "DT_C_01")
    assert excinfo.value.reason == "no_valid_record"


def test_repository_not_found(make_session):
    repository = DatahubPricelistRepository(session=make_session(records=[]))
    with pytest.raises(TariffLookupError) as excinfo:
        repository.find_tariff_records(RADIUS_GLN, "DT_C_01")
    assert excinfo.value.reason == "not_found"


def test_resolve_success(make_session, make_record, tariff_service_for):
    service = tariff_service_for(make_session(records=[make_record()]))
    result = service.resolve_network_tariff(RADIUS_GLN)

    assert result.ok
    assert result.failure is None
    assert result.tariff.average_rate == pytest.approx(0.22)


def test_resolve_upstream_failure_is_a_value(make_session, tariff_service_for):
    session = make_session(error=requests.ConnectionError("boom"))
    result = tariff_service_for(session).resolve_network_tariff(RADIUS_GLN)

    assert not result.ok
    assert result.failure.reason == "upstream_error"


def test_resolve_http_error(make_session, tariff_service_for):
    session = make_session(status_code=503)
    result = tariff_service_for(session).resolve_network_tariff(RADIUS_GLN)
    assert result.failure.reason == "upstream_error"


def test_resolve_maps_dso_code_to_gln(make_session, make_record, tariff_service_for):
    session = make_session(records=[make_record()])
    result = tariff_service_for(session).resolve_network_tariff("791")

    assert result.ok
    assert json.loads(session.calls[0]["params"]["filter"])["GLN_Number"] == RADIUS_GLN


def test_resolve_uses_operator_charge_code(make_session, make_record, tariff_service_for):
    session = make_session(records=[make_record()])
    tariff_service_for(session).resolve_network_tariff(N1_GLN)

    assert json.loads(session.calls[0]["params"]["filter"])["ChargeTypeCode"] == "CD"


def test_resolve_unknown_operator(make_session, tariff_service_for):
    session = make_session()
    result = tariff_service_for(session).resolve_network_tariff("999")

    assert result.failure.reason == "invalid_gln"
    assert session.calls == []


def test_successful_lookups_are_cached(make_session, make_record, tariff_service_for):
    session = make_session(records=[make_record()])
    service = tariff_service_for(session)

    service.resolve_network_tariff(RADIUS_GLN)
    service.resolve_network_tariff(RADIUS_GLN)
    assert len(session.calls) == 1

    service.clear_cache()
    service.resolve_network_tariff(RADIUS_GLN)
    assert len(session.calls) == 2


def test_failed_lookups_are_not_cached(make_session, tariff_service_for):
    session = make_session(error=requests.Timeout("slow"))
    service = tariff_service_for(session)

    service.resolve_network_tariff(RADIUS_GLN)
    service.resolve_network_tariff(RADIUS_GLN)
    assert len(session.calls) == 2


def test_with_fallback_prefers_live_rate(make_session, make_record, tariff_service_for):
    service = tariff_service_for(make_session(records=[make_record()]))
    tariff = service.with_fallback(service.resolve_network_tariff(RADIUS_GLN))

    assert tariff.source == "live"
    assert tariff.rate == pytest.approx(0.22)


def test_with_fallback_current_hour(make_session, make_record, tariff_service_for):
    service = tariff_service_for(make_session(records=[make_record()]))
    result = service.resolve_network_tariff(RADIUS_GLN)

    assert service.with_fallback(result, use_current_hour=True, hour=18).rate == 0.5
    assert service.with_fallback(result, use_current_hour=True, hour=3).rate == 0.1


def test_with_fallback_uses_static_table_by_gln(make_session, tariff_service_for):
    service = tariff_service_for(make_session())
    failed = TariffLookupResult.failed(RADIUS_GLN, "upstream_error", "down")

    tariff = service.with_fallback(failed)
    assert tariff.source == "fallback"
    assert tariff.rate == 0.217
    assert tariff.failure.reason == "upstream_error"


def test_with_fallback_uses_static_table_by_code(make_session, tariff_service_for):
    service = tariff_service_for(make_session())
    failed = TariffLookupResult.failed("911", "upstream_error", "down")
    assert service.with_fallback(failed).rate == 0.641


def test_with_fallback_default_for_unknown_operator(make_session, tariff_service_for):
    service = tariff_service_for(make_session())
    failed = TariffLookupResult.failed("nope", "invalid_gln", "unknown")

    tariff = service.with_fallback(failed)
    assert tariff.source == "default"
    assert tariff.rate == 0.30


def test_get_network_tariff_falls_back_on_outage(make_session, tariff_service_for):
    service = tariff_service_for(make_session(error=requests.ConnectionError("down")))
    tariff = service.get_network_tariff(N1_GLN)

    assert tariff.source == "fallback"
    assert tariff.rate == 0.192


def test_grid_repository_lookups():
    repository = GridProviderRepository()

    assert repository.find_by_id("791")["name"] == "Radius Elnet A/S"
    assert repository.find_by_gln(N1_GLN)["code"] == "131"
    assert repository.find_by_id("000") is None
    assert repository.find_charge_code(N1_GLN) == "CD"
    assert repository.find_charge_code("5790000610846") is None
    assert repository.find_fallback_tariff("5790001089290") == 0.448
    assert repository.find_fallback_tariff("085") == 0.35
    assert repository.find_fallback_tariff("nope") is None


def test_grid_providers_by_municipality(make_session, tariff_service_for):
    service = tariff_service_for(make_session())
    names = {provider.name for provider in service.get_grid_providers("københavn")}
    assert names == {"Radius Elnet A/S"}

    odense = {provider.code for provider in service.get_grid_providers("Odense")}
    assert odense == {"543", "531"}

    assert len(service.get_grid_providers()) == GridProviderRepository().count()


def danish_clock(*utc_parts):
    moment = to_danish_time(datetime(*utc_parts, tzinfo=timezone.utc))
    return lambda: moment


def test_current_hour_uses_danish_time(monkeypatch, make_session, make_record,
                                       tariff_service_for):
    # 15:30 UTC is 17:30 in Copenhagen during summer time
    monkeypatch.setattr(network_tariff_service, "danish_now", danish_clock(2025, 6, 10, 15, 30))
    service = tariff_service_for(make_session(records=[make_record()]))

    tariff = service.get_network_tariff(RADIUS_GLN, use_current_hour=True)
    assert tariff.rate == 0.5


def test_tariff_period_defaults_to_danish_hour(monkeypatch):
    monkeypatch.setattr(price_calculation_service, "danish_now", danish_clock(2025, 1, 15, 4, 30))
    assert get_tariff_period().period == "low"

    monkeypatch.setattr(price_calculation_service, "danish_now", danish_clock(2025, 1, 15, 16, 0))
    assert get_tariff_period().period == "peak"


def test_current_record_is_chosen_in_danish_time(monkeypatch, make_session, make_record):
    # 22:30 UTC on 10 June is already 11 June in Copenhagen
    clock = danish_clock(2025, 6, 10, 22, 30)
    monkeypatch.setattr(datahub_pricelist_repository, "danish_now_naive",
                        lambda: clock().replace(tzinfo=None))
    records = [make_record(low=0.7, high=0.7, peak=0.7, valid_from="2025-06-11T00:00:00"),
               make_record(valid_from="2025-01-01T00:00:00", valid_to="2025-06-11T00:00:00")]
    repository = DatahubPricelistRepository(session=make_session(records=records))

    assert repository.find_current_record(RADIUS_GLN, "DT_C_01")["Price1"] == 0.7


@pytest.mark.parametrize("status_code", [400, 404])
def test_client_errors_mean_no_tariff(make_session, status_code):
    repository = DatahubPricelistRepository(session=make_session(status_code=status_code))
    with pytest.raises(TariffLookupError) as excinfo:
        repository.find_tariff_records(RADIUS_GLN, "DT_C_01")
    assert excinfo.value.reason == "not_found"


def test_default_session_retries_rate_limits_and_outages():
    repository = DatahubPricelistRepository()
    retry = repository.session.get_adapter(repository.base_url).max_retries

    assert retry.total == 3
    assert set(retry.status_forcelist) == {429, 503}
    assert "GET" in retry.allowed_methods
