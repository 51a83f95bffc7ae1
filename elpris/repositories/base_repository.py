"""
Base repository interfaces for data access.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import UpstreamDataError
from ..config import app_config

# 400/404 from EnergiDataService mean "no data for this query"
EMPTY_RESULT_STATUSES = (400, 404)
RETRY_STATUSES = (429, 503)


def build_session(retries: int = 3, backoff_factor: float = 1.0) -> requests.Session:
    """Session that retries GETs on rate limiting and unavailability."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class BaseRepository(ABC):
    """Abstract base repository interface."""

    @abstractmethod
    def find_all(self) -> pd.DataFrame:
        """Find all records."""
        pass

    @abstractmethod
    def find_by_id(self, record_id: Any) -> Optional[pd.Series]:
        """Find record by ID."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Count total records."""
        pass


class EnergiDataServiceRepository(ABC):
    """Base for repositories backed by an EnergiDataService dataset."""

    error_class = UpstreamDataError

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.logger = logging.getLogger(self.__class__.__module__)
        self.timeout = timeout
        config = app_config.energi_data_service
        self.session = session or build_session(config.max_retries, config.retry_backoff_factor)
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'elpris-api/1.0',
        })

    def _get_records(self, url: str, params: Dict[str, str]) -> pd.DataFrame:
        """GET a dataset query and return its records as a DataFrame."""
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            if response.status_code in EMPTY_RESULT_STATUSES:
                self.logger.warning(
                    f"{url} returned {response.status_code}, treating as no data")
                return pd.DataFrame()
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            self.logger.error(f"Error fetching {url}: {e}")
            raise self.error_class(str(e), reason="upstream_error") from e
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {url}: {e}")
            raise self.error_class(
                f"Invalid JSON response: {e}", reason="upstream_error") from e

        records = payload.get('records') or []
        return pd.DataFrame.from_records(records)
