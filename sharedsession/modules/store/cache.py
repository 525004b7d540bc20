"""Cache backends for the distributed session store."""

import time
from typing import Callable, Dict, Optional, Tuple

import redis.asyncio as redis


class RedisCache:
    """Redis-backed cache. The only class in the store that talks to Redis."""

    def __init__(self, redis_client: redis.Redis, instance_name: str = "session:"):
        """
        Initialize Redis cache.

        Args:
            redis_client: Async Redis client created with decode_responses=False
            instance_name: Prefix applied to every cache key
        """
        self.redis = redis_client
        self.instance_name = instance_name

    def _fqkey(self, key: str) -> str:
        return f"{self.instance_name}{key}"

    async def get(self, key: str) -> Optional[bytes]:
        return await self.redis.get(self._fqkey(key))

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        await self.redis.set(self._fqkey(key), value, ex=ttl)

    async def refresh(self, key: str, ttl: int) -> None:
        # EXPIRE on a missing key is a no-op
        await self.redis.expire(self._fqkey(key), ttl)

    async def remove(self, key: str) -> None:
        await self.redis.delete(self._fqkey(key))

    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    async def close(self) -> None:
        await self.redis.aclose()


class MemoryCache:
    """Dict-backed cache with lazy sliding expiry. For local dev/tests."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # {key: (value, ttl, expires_at)}
        self._data: Dict[str, Tuple[bytes, int, float]] = {}

    def _read(self, key: str) -> Optional[Tuple[bytes, int, float]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry[2] <= self._clock():
            del self._data[key]
            return None
        return entry

    async def get(self, key: str) -> Optional[bytes]:
        entry = self._read(key)
        if entry is None:
            return None
        value, ttl, _ = entry
        # Reads slide the expiry window, like Redis-backed sessions refreshed on commit
        self._data[key] = (value, ttl, self._clock() + ttl)
        return value

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        self._data[key] = (bytes(value), ttl, self._clock() + ttl)

    async def refresh(self, key: str, ttl: int) -> None:
        entry = self._read(key)
        if entry is not None:
            self._data[key] = (entry[0], ttl, self._clock() + ttl)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return sum(1 for key in list(self._data) if self._read(key) is not None)
