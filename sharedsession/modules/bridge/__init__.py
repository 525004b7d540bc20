"""
Bridge Module - Black Box Interface

Purpose: Manage shared sessions by key from outside a request session
Interface: SessionService (create(), get(), save(), delete())
Hidden: Key generation, entry encoding, store access

Replaceable with any implementation of the SessionService protocol.
"""

from .service import DistributedCacheSessionService, SessionService, generate_session_key

__all__ = ["DistributedCacheSessionService", "SessionService", "generate_session_key"]
