"""
Session API endpoints.

Every endpoint catches all failures, logs them and answers with an empty
200 response; existing clients rely on never receiving error details.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Response
from fastapi.responses import PlainTextResponse

from ..bridge import SessionService
from .models import SessionKeyJsonValue

logger = logging.getLogger(__name__)


def create_session_router(session_service: SessionService) -> APIRouter:
    """
    Create session API router with injected session service.

    Args:
        session_service: Service managing shared sessions by key

    Returns:
        FastAPI router with /api/session endpoints
    """
    router = APIRouter(prefix="/api/session", tags=["session"])

    @router.post("", response_class=PlainTextResponse)
    async def create_session(
        values: Optional[List[SessionKeyJsonValue]] = Body(None),
    ):
        """
        Create a new session storing the submitted key/json values.

        Returns:
            200: The new session key as text
        """
        try:
            key = await session_service.create(values)
            return PlainTextResponse(key)
        except Exception as e:
            logger.error(f"Failed to create session: {e}", exc_info=True)
            return Response(status_code=200)

    @router.get("/{key}", response_model=List[SessionKeyJsonValue])
    async def get_session(key: str):
        """
        Retrieve existing session values for a key.

        Returns:
            200: Session values
            404: Session not found (or has no values)
        """
        try:
            values = await session_service.get(key)
        except Exception as e:
            logger.error(f"Failed to get session: {e}", exc_info=True)
            return Response(status_code=200)

        if values is None:
            return Response(status_code=404)

        return values

    @router.put("/{key}")
    async def save_session(
        key: str,
        values: Optional[List[SessionKeyJsonValue]] = Body(None),
    ):
        """
        Merge the submitted values into an existing session.

        Returns:
            200: Values saved (or the session does not exist)
        """
        try:
            await session_service.save(key, values)
        except Exception as e:
            logger.error(f"Failed to save session: {e}", exc_info=True)
        return Response(status_code=200)

    @router.delete("/{key}")
    async def delete_session(key: str):
        """
        Delete an existing session.

        Returns:
            200: Session deleted (or never existed)
        """
        try:
            await session_service.delete(key)
        except Exception as e:
            logger.error(f"Failed to delete session: {e}", exc_info=True)
        return Response(status_code=200)

    return router
