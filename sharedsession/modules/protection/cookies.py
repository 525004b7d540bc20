"""Session cookie values: the session key, protected and base64url encoded."""

import base64
import binascii
import logging
from typing import Optional

from ..errors import ProtectionError
from .protector import KeyProtector

logger = logging.getLogger(__name__)

# Must match the purpose the per-request session middleware protects its
# cookie with, or cookies written by the adoption middleware are rejected.
SESSION_PROTECTOR_PURPOSE = "SessionMiddleware"


def protect_session_key(protector: KeyProtector, session_key: str) -> str:
    """Protect a session key into a cookie-safe string (no padding)."""
    protected = protector.protect(session_key.encode("utf-8"))
    return base64.urlsafe_b64encode(protected).decode("ascii").rstrip("=")


def unprotect_session_key(protector: KeyProtector, cookie_value: Optional[str]) -> Optional[str]:
    """
    Recover the session key from a cookie value.

    Returns:
        The session key, or None if the value is missing, malformed or
        was not produced by a protector with the same key and purpose
    """
    if not cookie_value:
        return None

    padded = cookie_value + "=" * (-len(cookie_value) % 4)
    try:
        protected = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError):
        logger.warning("Session cookie is not valid base64")
        return None

    try:
        return protector.unprotect(protected).decode("utf-8")
    except ProtectionError:
        logger.warning("Session cookie failed unprotection")
        return None
    except UnicodeDecodeError:
        logger.warning("Session cookie does not hold a text key")
        return None
