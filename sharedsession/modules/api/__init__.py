"""
API Module - Black Box Interface

Purpose: HTTP routing over the session modules
Interface: REST API endpoints (routes.create_session_router,
           consumer.create_consumer_router), shared data models
Hidden: Request parsing, error responses

The API module only orchestrates - it contains no business logic.
All logic is delegated to the bridge service and the request session.
"""

from .models import SessionKeyJsonValue

__all__ = ["SessionKeyJsonValue"]
