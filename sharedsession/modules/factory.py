"""
Shared Session Factory following Black Box Design principles.

This factory:
- Constructs the session stack based on configuration
- Wires dependencies together
- Returns the components the application needs (hiding implementation)
"""

import logging
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as redis

from ..config.provider import ConfigProvider, SessionOptions
from .bridge import DistributedCacheSessionService, SessionService
from .protection import AesGcmProtectionProvider, ProtectionProvider, load_or_create_master_key
from .store import Cache, DistributedSessionStore, MemoryCache, RedisCache, SessionStore

logger = logging.getLogger(__name__)


@dataclass
class SharedSessionComponents:
    """Everything the application needs to serve shared sessions."""
    cache: Cache
    session_store: SessionStore
    protection_provider: ProtectionProvider
    session_service: SessionService
    options: SessionOptions

    async def close(self) -> None:
        """Release backend connections."""
        close = getattr(self.cache, "close", None)
        if close is not None:
            await close()


class SharedSessionFactory:
    """
    Factory for building the shared session stack.

    This is the composition root that:
    - Creates the cache backend, store and protection provider
    - Wires them together via dependency injection
    - Returns the components, never module-level singletons
    """

    @staticmethod
    def build(config_provider: ConfigProvider) -> SharedSessionComponents:
        """
        Build the complete shared session stack.

        Args:
            config_provider: Configuration provider

        Returns:
            SharedSessionComponents wired from configuration
        """
        options = config_provider.get_session_options()
        store_config = config_provider.get_store_config()
        protection_config = config_provider.get_protection_config()

        if store_config.uses_redis:
            logger.info("Building session store on Redis")
            # Session entries are raw bytes, so responses must not be decoded
            redis_client = redis.from_url(
                store_config.redis_url,
                password=store_config.redis_password,
                decode_responses=False,
            )
            cache = RedisCache(redis_client, instance_name=store_config.instance_name)
        else:
            logger.warning("Building session store in memory - sessions are not shared between processes")
            cache = MemoryCache()

        master_key = load_or_create_master_key(protection_config.key_path)

        return SharedSessionFactory.build_from(
            cache, AesGcmProtectionProvider(master_key), options
        )

    @staticmethod
    def build_from(
        cache: Cache,
        protection_provider: ProtectionProvider,
        options: Optional[SessionOptions] = None,
    ) -> SharedSessionComponents:
        """
        Build the stack around existing collaborators (tests, embedding apps).

        Args:
            cache: Cache backend
            protection_provider: Cookie protection provider
            options: Session options (defaults when omitted)
        """
        options = options or SessionOptions()
        session_store = DistributedSessionStore(cache)
        session_service = DistributedCacheSessionService(session_store, cache, options)

        return SharedSessionComponents(
            cache=cache,
            session_store=session_store,
            protection_provider=protection_provider,
            session_service=session_service,
            options=options,
        )
