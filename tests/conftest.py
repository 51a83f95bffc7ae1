import time

import pytest
import requests

from elpris.config import RegulatoryFees
from elpris.repositories import DatahubPricelistRepository, SpotPriceRepository
from elpris.services import NetworkTariffService

RADIUS_GLN = "5790000705689"
N1_GLN = "5790001089030"


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.payload


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, records=None, error=None, status_code=200, delay=0.0):
        self.headers = {}
        self.records = records or []
        self.error = error
        self.status_code = status_code
        self.delay = delay
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return FakeResponse({"records": self.records}, self.status_code)


def pricelist_record(low=0.1, high=0.2, peak=0.5, valid_from="2020-01-01T00:00:00",
                     valid_to=None, owner="Radius Elnet A/S"):
    record = {
        "ChargeOwner": owner,
        "GLN_Number": RADIUS_GLN,
        "ChargeType": "D03",
        "ChargeTypeCode": "DT_C_01",
        "ValidFrom": valid_from,
        "ValidTo": valid_to,
    }
    for hour in range(24):
        if hour < 6:
            rate = low
        elif 17 <= hour < 21:
            rate = peak
        else:
            rate = high
        record[f"Price{hour + 1}"] = rate
    return record


@pytest.fixture(autouse=True)
def clear_caches():
    NetworkTariffService.fetch_tariff.cache_clear()
    SpotPriceRepository.find_by_area_and_dates.cache_clear()
    yield
    NetworkTariffService.fetch_tariff.cache_clear()
    SpotPriceRepository.find_by_area_and_dates.cache_clear()


@pytest.fixture
def regulatory_fees():
    return RegulatoryFees()


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_record():
    return pricelist_record


@pytest.fixture
def tariff_service_for():
    def build(session):
        return NetworkTariffService(DatahubPricelistRepository(session=session))
    return build


@pytest.fixture
def spot_repository_for():
    def build(session):
        return SpotPriceRepository(session=session)
    return build
