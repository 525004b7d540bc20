"""Writing the protected session cookie onto a response."""

from starlette.responses import Response

from ...config.provider import CookieOptions
from ..protection import KeyProtector, protect_session_key


def set_session_cookie(
    response: Response,
    protector: KeyProtector,
    session_key: str,
    cookie: CookieOptions,
) -> None:
    """Set the session cookie and mark the response as non-cacheable."""
    response.set_cookie(
        key=cookie.name,
        value=protect_session_key(protector, session_key),
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )
    response.headers["Cache-Control"] = "no-cache"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "-1"
