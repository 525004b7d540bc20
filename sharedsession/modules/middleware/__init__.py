"""
Session Middleware Module - Black Box Interface

Purpose: Give every request a server-side session, and let a request adopt
         a shared session named by a "sessionid" query parameter
Interface: use_shared_sessions(), request_session dependency,
           SessionMiddleware, SharedSessionMiddleware
Hidden: Cookie protection, session context plumbing, commit handling

Handlers depend on request_session and never know whether they are
working on their own session or an adopted shared one.
"""

import logging

from fastapi import FastAPI, Request

from ...config.provider import SessionOptions
from ..protection import ProtectionProvider
from ..store.interfaces import SessionStore
from .context import RequestSessionContext, get_session_context, request_session
from .session import SessionMiddleware
from .shared import SESSION_ID_QUERY_KEY, SharedSessionMiddleware

logger = logging.getLogger(__name__)


def use_shared_sessions(
    app: FastAPI,
    session_store: SessionStore,
    protection_provider: ProtectionProvider,
    options: SessionOptions,
) -> FastAPI:
    """
    Register the session middlewares on an app.

    The per-request session middleware must run before the shared session
    middleware so the request session context exists when adoption happens.
    Starlette runs the most recently registered middleware first, so the
    shared session middleware is registered first.

    Returns:
        The app, for chaining
    """
    shared_middleware = SharedSessionMiddleware(session_store, protection_provider, options)
    session_middleware = SessionMiddleware(session_store, protection_provider, options)

    @app.middleware("http")
    async def shared_session(request: Request, call_next):
        return await shared_middleware(request, call_next)

    @app.middleware("http")
    async def session(request: Request, call_next):
        return await session_middleware(request, call_next)

    logger.info("Session and shared session middleware registered")
    return app


__all__ = [
    "SESSION_ID_QUERY_KEY",
    "RequestSessionContext",
    "SessionMiddleware",
    "SharedSessionMiddleware",
    "get_session_context",
    "request_session",
    "use_shared_sessions",
]
