import logging
import secrets
import uuid
from typing import List, Optional, Protocol, Sequence

from ...config.provider import SessionOptions
from ..api.models import SessionKeyJsonValue
from ..codec import decode, encode
from ..errors import InvalidArgumentError
from ..store.interfaces import Cache, Session, SessionStore

logger = logging.getLogger(__name__)


class SessionService(Protocol):
    """Protocol for managing shared sessions by key."""

    async def create(self, values: Sequence[SessionKeyJsonValue]) -> str:
        ...

    async def get(self, key: str) -> Optional[List[SessionKeyJsonValue]]:
        ...

    async def save(self, key: str, values: Sequence[SessionKeyJsonValue]) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


def generate_session_key() -> str:
    """Generate an unguessable session key (16 random bytes as a UUID string)."""
    return str(uuid.UUID(bytes=secrets.token_bytes(16)))


class DistributedCacheSessionService:
    """
    Manages session values stored through the distributed session store.

    Values are written in the same entry format the request session uses,
    so any application sharing the store can read them.
    """

    def __init__(self, session_store: SessionStore, cache: Cache, options: SessionOptions):
        """
        Initialize session service.

        Args:
            session_store: Store creating session objects by key
            cache: Cache backing the store (used to remove sessions)
            options: Session timeouts
        """
        if session_store is None:
            raise InvalidArgumentError("session_store")
        if cache is None:
            raise InvalidArgumentError("cache")
        if options is None:
            raise InvalidArgumentError("options")

        self.session_store = session_store
        self.cache = cache
        self.options = options

    async def create(self, values: Sequence[SessionKeyJsonValue]) -> str:
        """
        Create a new session holding the submitted values.

        Returns:
            The new session key

        Raises:
            InvalidArgumentError: If values is None
        """
        if values is None:
            raise InvalidArgumentError("values")

        key = generate_session_key()
        session = self._open(key, is_new=True)

        self._set_values(session, values)
        await session.commit()

        logger.info(f"Created shared session with {len(session.keys)} entries")
        return key

    async def get(self, key: str) -> Optional[List[SessionKeyJsonValue]]:
        """
        Get all values of an existing session.

        Returns:
            The session values, or None if the session has no entries.
            A session that exists but is empty cannot be told apart from
            a missing one.

        Raises:
            ValueParseError: If any stored entry is not a JSON object
        """
        session = await self._load(key)

        if not session.keys:
            return None

        values = []
        for name in session.keys:
            raw = session.try_get(name)
            if raw is not None:
                values.append(SessionKeyJsonValue(key=name, json_value=decode(raw)))

        return values

    async def save(self, key: str, values: Sequence[SessionKeyJsonValue]) -> None:
        """
        Merge values into an existing session.

        Submitted entries are added or overwritten; entries not submitted
        are left untouched. Does nothing if the session has no entries.
        """
        if values is None:
            raise InvalidArgumentError("values")

        session = await self._load(key)

        if not session.keys:
            logger.debug(f"Ignoring save for unknown session {key}")
            return

        self._set_values(session, values)
        await session.commit()

    async def delete(self, key: str) -> None:
        """Clear the session and remove it from the cache, whether or not it exists."""
        session = await self._load(key)
        session.clear()

        await self.cache.remove(key)

    def _set_values(self, session: Session, values: Sequence[SessionKeyJsonValue]) -> None:
        for pair in values:
            session.set(pair.key, encode(pair.key, pair.json_value))

    def _open(self, key: str, is_new: bool = False) -> Session:
        return self.session_store.create(
            key,
            self.options.idle_timeout,
            self.options.io_timeout,
            lambda: True,
            is_new,
        )

    async def _load(self, key: str) -> Session:
        if not key:
            raise InvalidArgumentError("key")
        session = self._open(key)
        await session.load()
        return session
