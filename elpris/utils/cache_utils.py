import logging
import threading
from collections import OrderedDict
from functools import wraps
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def ttl_cache(ttl_seconds=3600, max_entries=None, stale_on=()):
    """
    Cache a method's return value per argument tuple for ttl_seconds.

    Exceptions are not cached, so a failed lookup is retried on the next call.
    When the call raises one of ``stale_on`` and an expired entry for the same
    arguments is still held, that entry is returned instead. With
    ``max_entries`` the least recently used entries are evicted.

    The cache is shared by all instances; call ``<method>.cache_clear()`` to
    empty it.
    """
    cache = OrderedDict()
    lock = threading.Lock()

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args):
            now = datetime.now(timezone.utc)
            with lock:
                entry = cache.get(args)
                if entry is not None:
                    cache.move_to_end(args)
                    if (now - entry[0]).total_seconds() < ttl_seconds:
                        return entry[1]

            try:
                result = func(self, *args)
            except stale_on as e:
                if entry is None:
                    raise
                logger.warning(f"⚠️  Serving stale {func.__name__}{args}: {e}")
                return entry[1]

            with lock:
                cache[args] = (now, result)
                cache.move_to_end(args)
                while max_entries is not None and len(cache) > max_entries:
                    cache.popitem(last=False)
            return result

        def cache_clear():
            with lock:
                cache.clear()

        wrapper.cache_clear = cache_clear
        wrapper.cache_keys = lambda: list(cache.keys())
        return wrapper

    return decorator
