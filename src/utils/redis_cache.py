import copy
import datetime
import logging
import os
import pickle
import sys
import time
from dataclasses import dataclass
from hashlib import md5
from typing import Any, cast

from redis import Redis
from redis.exceptions import RedisError

from utils.get_logger import get_logger

# Cache is disabled in test environment unless explicitly enabled
DISABLE_CACHE = (
    os.getenv("ENVIRONMENT", "").lower() == "test"
    and os.getenv("ENABLE_CACHE_FOR_TESTS", "").lower() != "1"
)


def disable_cache():
    global DISABLE_CACHE
    DISABLE_CACHE = True


@dataclass
class CacheEntry:
    expiry: int = int(datetime.datetime.now().timestamp())
    data: Any = None
    size: int = 0
    data_type: str = ""
    key: str = ""
    function: str = ""

    def to_dict(self):
        return {
            field.name: getattr(self, field.name) for field in self.__dataclass_fields__.values()
        }


def build_redis_client(host: str, port: int, password: str | None = None) -> Redis:
    """Synchronous Redis client for pickled cache entries."""
    # decode_responses=False because we are storing pickled binary values
    return Redis(
        host=host,
        port=port,
        password=password,
        decode_responses=False,
        socket_timeout=5,  # 5 second socket timeout
        socket_connect_timeout=5,  # 5 second connection timeout
        retry_on_timeout=True,
        health_check_interval=30,
    )


class RedisCache:
    """
    Redis-backed cache using a SYNCHRONOUS Redis client.

    Redis operations are fast enough (~1ms) that blocking inside async
    handlers is acceptable. Every Redis failure is logged and treated as
    a cache miss, so the cached function still runs.
    """

    def __init__(
        self,
        client: Redis,
        defaultTTL: int = 3600,
        prefix: str = "cache:",
        verbose: bool = False,
        allow_empty: bool = False,
    ) -> None:
        self._redis = client
        self.defaultTTL = defaultTTL
        self.prefix = prefix
        self.allow_empty = allow_empty

        logger_name = f"rediscache.{prefix}" if prefix else "rediscache"
        level = logging.DEBUG if verbose else logging.WARNING
        self.logging = get_logger(logger_name, level=level)

        self.disableCache = False

    def get_cache_key(self, fn: str, prefix: str = "", args=None, kwargs=None) -> str:
        """Generate a unique cache key for a function call."""
        args = args or []
        kwargs = kwargs or {}

        cache_key = fn
        func_args = [str(arg) for arg in args]
        if kwargs or func_args:
            cache_key = md5(
                str.encode(f"{cache_key}_{str(sorted(kwargs.items())) + '-'.join(func_args)}")
            ).hexdigest()

        return f"{prefix}_{cache_key}" if prefix else cache_key

    def _full_key(self, key: str) -> str:
        """Apply instance prefix to the key for Redis storage."""
        if self.prefix and not key.startswith(self.prefix):
            return f"{self.prefix}:{key}"
        return key

    def filter_empty(self, entry: CacheEntry) -> CacheEntry | None:
        """Filter out empty data."""
        data = entry.data
        if data is None or (isinstance(data, list | str | bytes | dict) and len(data) == 0):
            return None
        return entry

    def add(self, data: Any, cache_key: str, funcName: str, expiry: float) -> CacheEntry | None:
        """Add data to Redis cache (SYNCHRONOUS)."""
        entry = CacheEntry(
            expiry=int(expiry),
            data=data,
            size=sys.getsizeof(data),
            data_type=str(type(data)),
            key=cache_key,
            function=funcName,
        )

        if not self.allow_empty and self.filter_empty(entry) is None:
            return None
        # Degraded results are served but never stored
        if getattr(data, "degraded", False):
            return None

        ttl_seconds = max(int(expiry - time.time()), 1)
        try:
            payload = pickle.dumps(entry, protocol=pickle.HIGHEST_PROTOCOL)
            self._redis.set(self._full_key(cache_key), payload, ex=ttl_seconds)
        except (RedisError, pickle.PicklingError) as e:
            self.logging.warning(f"Redis add error for {cache_key}: {e}")
            return None

        self.logging.debug(f"Added to Redis: {cache_key} (ttl={ttl_seconds})")
        return entry

    def read(self, key: str, mutable: bool = True) -> CacheEntry | None:
        """Read from Redis cache (SYNCHRONOUS)."""
        storage_key = self._full_key(key)
        try:
            raw = self._redis.get(storage_key)
        except RedisError as e:
            self.logging.warning(f"Redis read failed for {key}: {e}")
            return None

        if raw is None:
            self.logging.debug(f"Redis miss: {storage_key}")
            return None

        try:
            entry = pickle.loads(cast(bytes, raw))
        except (pickle.UnpicklingError, AttributeError, ModuleNotFoundError) as e:
            # Stale entry pickled by an older version of a cached type
            self.logging.debug(f"Stale cache entry for {key}: {e}")
            self.remove(key)
            return None

        if not isinstance(entry, CacheEntry):
            self.logging.warning(f"Invalid cache entry format for {key}")
            return None

        if entry.expiry < time.time():
            self.logging.info(f"Cache logically expired: {key}")
            self.remove(key)
            return None

        return entry if mutable else copy.deepcopy(entry)

    def remove(self, key: str):
        """Remove a key from Redis cache (SYNCHRONOUS)."""
        try:
            self._redis.delete(self._full_key(key))
        except RedisError as e:
            self.logging.warning(f"Redis delete failed for {key}: {e}")

    def clear(self):
        """Clear the cache for this prefix (SYNCHRONOUS)."""
        if not self.prefix:
            self.logging.warning("Clear called without prefix - skipping for safety")
            return

        pattern = f"{self.prefix}:*"
        try:
            cursor = 0
            while True:
                cursor, keys = cast(
                    tuple[int, list[bytes]],
                    self._redis.scan(cursor=cursor, match=pattern, count=100),
                )
                if keys:
                    self._redis.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            self.logging.warning(f"Redis clear failed: {e}")

    def close(self):
        """Close the Redis connection."""
        if self._redis:
            self._redis.close()

    @classmethod
    def use_cache(cls, instance: "RedisCache", prefix: str = ""):
        """
        Decorator to cache async function results.

        The decorated function remains async, but cache read/write is sync.
        Pass no_cache=True to bypass the cache for one call.
        """

        def decorator(func):
            async def inner1(*args, **kwargs):
                cacheDisabled = kwargs.pop("no_cache", False)
                if DISABLE_CACHE or instance.disableCache or cacheDisabled:
                    return await func(*args, **kwargs)

                cache_key = instance.get_cache_key(
                    fn=func.__name__, prefix=prefix, args=args, kwargs=kwargs
                )

                cachedEntry = instance.read(cache_key)
                if cachedEntry is not None:
                    instance.logging.debug(f"Cache hit: {cache_key}")
                    return cachedEntry.data

                instance.logging.debug(f"Cache miss: {cache_key}")
                data = await func(*args, **kwargs)
                instance.add(data, cache_key, funcName=func.__name__, expiry=time.time() + instance.defaultTTL)
                return data

            return inner1

        return decorator
