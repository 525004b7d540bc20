"""Session store interfaces following Black Box Design principles."""
from typing import Callable, List, Optional, Protocol


class Cache(Protocol):
    """Byte-valued cache with sliding expiry."""

    async def get(self, key: str) -> Optional[bytes]:
        ...

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store value, expiring after ttl seconds without access."""
        ...

    async def refresh(self, key: str, ttl: int) -> None:
        """Restart the expiry window of an existing entry."""
        ...

    async def remove(self, key: str) -> None:
        """Remove an entry. Removing a missing entry is not an error."""
        ...

    async def ping(self) -> bool:
        ...


class Session(Protocol):
    """A single session: named byte entries under one session key."""

    @property
    def key(self) -> str:
        ...

    @property
    def is_new(self) -> bool:
        ...

    @property
    def is_loaded(self) -> bool:
        ...

    @property
    def is_modified(self) -> bool:
        ...

    @property
    def is_available(self) -> bool:
        ...

    @property
    def keys(self) -> List[str]:
        ...

    def try_get(self, name: str) -> Optional[bytes]:
        ...

    def set(self, name: str, value: bytes) -> None:
        ...

    def remove(self, name: str) -> None:
        ...

    def clear(self) -> None:
        ...

    async def load(self) -> None:
        ...

    async def commit(self) -> None:
        ...


class SessionStore(Protocol):
    """Creates session objects bound to a key."""

    def create(
        self,
        key: str,
        idle_timeout: int,
        io_timeout: int,
        try_establish_session: Callable[[], bool],
        is_new: bool,
    ) -> Session:
        """
        Create a session object for key.

        Args:
            key: Session key
            idle_timeout: Seconds without access before the session expires
            io_timeout: Seconds allowed for a single load or commit
            try_establish_session: Called before the first write; returning
                False makes writes fail
            is_new: True skips loading existing data for the key
        """
        ...
