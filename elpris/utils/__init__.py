"""
Utility helpers.
"""

from .cache_utils import ttl_cache
from .time_utils import DANISH_TIMEZONE, to_danish_time, danish_now, danish_now_naive

__all__ = ["ttl_cache", "DANISH_TIMEZONE", "to_danish_time", "danish_now", "danish_now_naive"]
