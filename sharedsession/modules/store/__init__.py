"""
Store Module - Black Box Interface

Purpose: Hold session data keyed by session key
Interface: DistributedSessionStore.create(), Session (load/keys/try_get/set/
           remove/clear/commit), Cache backends (RedisCache, MemoryCache)
Hidden: Serialized session layout, sliding expiry, I/O timeouts

The store is the single source of truth for session data. Any cache that
satisfies the Cache protocol (Redis, memory, SQL) can back it.
"""

from .cache import MemoryCache, RedisCache
from .distributed import DistributedSession, DistributedSessionStore
from .interfaces import Cache, Session, SessionStore

__all__ = [
    "Cache",
    "DistributedSession",
    "DistributedSessionStore",
    "MemoryCache",
    "RedisCache",
    "Session",
    "SessionStore",
]
