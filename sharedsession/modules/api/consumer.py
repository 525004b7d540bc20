"""
Consumer endpoints working on the request's active session.

Visiting /session?sessionid=<key> shows the shared session's values;
afterwards /session keeps showing them through the session cookie.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import RedirectResponse

from ..codec import decode, encode
from ..middleware import request_session
from ..store.interfaces import Session
from .models import SessionKeyJsonValue


def create_consumer_router() -> APIRouter:
    """Create router exposing the active request session."""
    router = APIRouter(tags=["consumer"])

    @router.get("/")
    async def index():
        return RedirectResponse(url="/session")

    @router.get("/session", response_model=List[SessionKeyJsonValue])
    async def list_values(session: Session = Depends(request_session)):
        """List every entry of the active session."""
        values = []
        for name in session.keys:
            raw = session.try_get(name)
            if raw is not None:
                values.append(SessionKeyJsonValue(key=name, json_value=decode(raw)))
        return values

    @router.put("/session/{name}")
    async def set_value(
        name: str,
        value: Dict[str, Any] = Body(...),
        session: Session = Depends(request_session),
    ):
        """Set one entry of the active session."""
        session.set(name, encode(name, value))
        return {"key": name}

    @router.delete("/session/{name}")
    async def remove_value(name: str, session: Session = Depends(request_session)):
        """Remove one entry of the active session."""
        session.remove(name)
        return {"key": name}

    return router
