"""
Shared session adoption middleware.

If a request carries a "sessionid" query parameter naming a live shared
session, that session replaces the request's own session until the
request completes, and the session cookie is rewritten so later requests
without the parameter still resolve to it.
"""

import logging
from urllib.parse import parse_qsl, urlencode

from fastapi import Request

from ...config.provider import SessionOptions
from ..errors import StoreFailureError
from ..protection import SESSION_PROTECTOR_PURPOSE, ProtectionProvider
from ..store.interfaces import Session, SessionStore
from .context import get_session_context
from .cookie import set_session_cookie

logger = logging.getLogger(__name__)

SESSION_ID_QUERY_KEY = "sessionid"


class SharedSessionMiddleware:
    """Adopts a shared session named in the query string for one request."""

    def __init__(
        self,
        session_store: SessionStore,
        protection_provider: ProtectionProvider,
        options: SessionOptions,
    ):
        """
        Initialize shared session middleware.

        Args:
            session_store: Store the shared sessions live in
            protection_provider: Provider shared with the session middleware;
                the cookie is protected under the same purpose
            options: Session timeouts and cookie settings
        """
        self.session_store = session_store
        self.options = options
        self.protector = protection_provider.create_protector(SESSION_PROTECTOR_PURPOSE)

    async def __call__(self, request: Request, call_next):
        """Process the request, adopting the shared session if one is named."""
        if SESSION_ID_QUERY_KEY not in request.query_params:
            return await call_next(request)

        session_key = request.query_params[SESSION_ID_QUERY_KEY]

        # Downstream sees a clean URL whether or not the key resolves
        self._strip_session_id(request)

        session = await self._get_existing_session(session_key)
        if session is None:
            return await call_next(request)

        context = get_session_context(request)
        context.override = session

        try:
            response = await call_next(request)
        finally:
            context.override = None
            try:
                await session.commit()
            except Exception as e:
                logger.error(f"Error committing shared session: {e}")

        # Replaces any cookie from a visit before the shared key was submitted
        set_session_cookie(response, self.protector, session_key, self.options.cookie)
        return response

    async def _get_existing_session(self, session_key: str):
        """Load the session for key, or None if it has no entries."""
        if not session_key:
            return None

        session: Session = self.session_store.create(
            session_key,
            self.options.idle_timeout,
            self.options.io_timeout,
            lambda: True,
            False,
        )

        try:
            await session.load()
        except StoreFailureError as e:
            logger.error(f"Could not load shared session: {e}")
            return None

        if not session.keys:
            logger.info("Shared session key did not resolve to a live session")
            return None

        return session

    @staticmethod
    def _strip_session_id(request: Request) -> None:
        query = request.scope.get("query_string", b"").decode("latin-1")
        remaining = [
            (name, value)
            for name, value in parse_qsl(query, keep_blank_values=True)
            if name != SESSION_ID_QUERY_KEY
        ]
        request.scope["query_string"] = urlencode(remaining).encode("latin-1")
