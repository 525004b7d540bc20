"""
Request-scoped session context.

The per-request session middleware sets the default session; the shared
session middleware may install an override for the rest of the request.
Handlers always go through the active session and never see which one it is.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..store.interfaces import Session

SESSION_CONTEXT_ATTR = "session_context"


@dataclass
class RequestSessionContext:
    """Sessions available to the current request."""

    default: Optional[Session] = None
    override: Optional[Session] = None

    @property
    def active(self) -> Optional[Session]:
        """The override when one is installed, else the default session."""
        if self.override is not None:
            return self.override
        return self.default


def get_session_context(request: Request) -> RequestSessionContext:
    """Get the request's session context, creating an empty one if needed."""
    context = getattr(request.state, SESSION_CONTEXT_ATTR, None)
    if context is None:
        context = RequestSessionContext()
        setattr(request.state, SESSION_CONTEXT_ATTR, context)
    return context


async def request_session(request: Request) -> Session:
    """
    FastAPI dependency returning the loaded active session.

    Raises:
        RuntimeError: If no session middleware is installed for the app
    """
    session = get_session_context(request).active
    if session is None:
        raise RuntimeError(
            "Session has not been configured for this application or request. "
            "Call use_shared_sessions(app, ...) at startup."
        )

    await session.load()
    return session
