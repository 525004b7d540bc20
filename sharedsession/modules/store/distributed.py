import asyncio
import logging
from typing import Callable, Dict, List, Optional

from ..errors import CommitFailureError, InvalidArgumentError, StoreFailureError
from .interfaces import Cache
from .serialization import KEY_LENGTH_LIMIT, deserialize, serialize

logger = logging.getLogger(__name__)


class DistributedSession:
    """
    Session whose entries live in a single cache value.

    Entries are loaded once with load() and held in memory; set/remove/clear
    only change the in-memory copy until commit() writes it back.
    """

    def __init__(
        self,
        cache: Cache,
        key: str,
        idle_timeout: int,
        io_timeout: int,
        try_establish_session: Callable[[], bool],
        is_new: bool,
    ):
        self._cache = cache
        self._key = key
        self._idle_timeout = idle_timeout
        self._io_timeout = io_timeout
        self._try_establish_session = try_establish_session
        self._is_new = is_new
        self._entries: Dict[str, bytes] = {}
        self._is_modified = False
        # A new session has nothing to load
        self._loaded = is_new
        self._is_available = is_new

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_modified(self) -> bool:
        return self._is_modified

    @property
    def is_available(self) -> bool:
        return self._is_available

    @property
    def keys(self) -> List[str]:
        self._ensure_loaded()
        return list(self._entries)

    def try_get(self, name: str) -> Optional[bytes]:
        self._ensure_loaded()
        value = self._entries.get(name)
        return bytes(value) if value is not None else None

    def set(self, name: str, value: bytes) -> None:
        if value is None:
            raise InvalidArgumentError("value")
        self._ensure_loaded()

        if len(name.encode("utf-8")) > KEY_LENGTH_LIMIT:
            raise ValueError(f"Session entry name exceeds {KEY_LENGTH_LIMIT} bytes")
        if not self._try_establish_session():
            raise RuntimeError("The session cannot be established after the response has started.")

        self._entries[name] = bytes(value)
        self._is_modified = True

    def remove(self, name: str) -> None:
        self._ensure_loaded()
        if self._entries.pop(name, None) is not None:
            self._is_modified = True

    def clear(self) -> None:
        self._ensure_loaded()
        self._entries.clear()
        self._is_modified = True

    async def load(self) -> None:
        """
        Load entries from the cache. Idempotent; new sessions skip it.

        Raises:
            StoreFailureError: If the cache fails or exceeds the I/O timeout
        """
        if self._loaded:
            return

        try:
            data = await asyncio.wait_for(self._cache.get(self._key), timeout=self._io_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Loading session {self._key} timed out after {self._io_timeout}s")
            raise StoreFailureError(f"Loading session timed out after {self._io_timeout}s") from e
        except Exception as e:
            logger.error(f"Loading session {self._key} failed: {e}")
            raise StoreFailureError(f"Loading session failed: {e}") from e

        self._entries = deserialize(data)
        self._loaded = True
        self._is_available = True

    async def commit(self) -> None:
        """
        Write changes back to the cache.

        Modified sessions are written (or removed when empty); unmodified
        sessions only have their expiry window refreshed.

        Raises:
            CommitFailureError: If the cache fails or exceeds the I/O timeout
        """
        try:
            if self._is_modified:
                if self._entries:
                    operation = self._cache.set(
                        self._key, serialize(self._entries), self._idle_timeout
                    )
                else:
                    operation = self._cache.remove(self._key)
            else:
                operation = self._cache.refresh(self._key, self._idle_timeout)

            await asyncio.wait_for(operation, timeout=self._io_timeout)
        except asyncio.TimeoutError as e:
            raise CommitFailureError(
                f"Committing session timed out after {self._io_timeout}s"
            ) from e
        except Exception as e:
            raise CommitFailureError(f"Committing session failed: {e}") from e

        if self._is_modified:
            logger.debug(f"Session {self._key} committed with {len(self._entries)} entries")
        self._is_modified = False

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("Session must be loaded with 'await session.load()' before use")


class DistributedSessionStore:
    """Creates DistributedSession objects over a shared cache."""

    def __init__(self, cache: Cache):
        if cache is None:
            raise InvalidArgumentError("cache")
        self.cache = cache

    def create(
        self,
        key: str,
        idle_timeout: int,
        io_timeout: int,
        try_establish_session: Callable[[], bool],
        is_new: bool,
    ) -> DistributedSession:
        if not key:
            raise InvalidArgumentError("key")
        if idle_timeout <= 0 or io_timeout <= 0:
            raise InvalidArgumentError("Session timeouts must be positive")
        if try_establish_session is None:
            raise InvalidArgumentError("try_establish_session")

        return DistributedSession(
            self.cache, key, idle_timeout, io_timeout, try_establish_session, is_new
        )
