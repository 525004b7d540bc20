"""
Per-request session middleware.

Resolves the request's own session from the protected session cookie,
makes it available through the request session context, and commits it
once the rest of the pipeline has run.
"""

import logging

from fastapi import Request

from ...config.provider import SessionOptions
from ..bridge.service import generate_session_key
from ..protection import SESSION_PROTECTOR_PURPOSE, ProtectionProvider, unprotect_session_key
from ..store.interfaces import Session, SessionStore
from .context import get_session_context
from .cookie import set_session_cookie

logger = logging.getLogger(__name__)


class _SessionEstablisher:
    """Records whether the session was written to and needs a cookie."""

    def __init__(self):
        self.should_establish = False

    def try_establish(self) -> bool:
        self.should_establish = True
        return True


class SessionMiddleware:
    """Cookie-addressed server-side session for each request."""

    def __init__(
        self,
        session_store: SessionStore,
        protection_provider: ProtectionProvider,
        options: SessionOptions,
    ):
        self.session_store = session_store
        self.options = options
        self.protector = protection_provider.create_protector(SESSION_PROTECTOR_PURPOSE)

    async def __call__(self, request: Request, call_next):
        """Attach the cookie's session to the request and commit it afterwards."""
        cookie_value = request.cookies.get(self.options.cookie.name)
        session_key = unprotect_session_key(self.protector, cookie_value)

        is_new = session_key is None
        if is_new:
            if cookie_value:
                logger.warning("Discarding unreadable session cookie, starting a new session")
            session_key = generate_session_key()

        establisher = _SessionEstablisher()
        session = self.session_store.create(
            session_key,
            self.options.idle_timeout,
            self.options.io_timeout,
            establisher.try_establish,
            is_new,
        )

        context = get_session_context(request)
        context.default = session

        try:
            response = await call_next(request)
        finally:
            context.default = None
            await self._commit(session)

        if is_new and establisher.should_establish:
            set_session_cookie(response, self.protector, session_key, self.options.cookie)

        return response

    async def _commit(self, session: Session) -> None:
        # Nothing was read, or a new session was never written to
        if not session.is_loaded or (session.is_new and not session.is_modified):
            return

        try:
            await session.commit()
        except Exception as e:
            logger.error(f"Error committing the session: {e}")
