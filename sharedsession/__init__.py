"""
SharedSession - Server-side sessions shared between web applications

One application creates a session and hands out its key; any other
application that sees the key (as a ?sessionid= query parameter) adopts
the same server-side session for the duration of the request and keeps
it afterwards through the session cookie.

Architecture:
- Each module is self-contained with clear interfaces
- Collaborators (store, cache, protector) are injected, never global
- All communication through defined interfaces

Modules:
- codec: JSON value <-> session entry bytes
- store: distributed session store over a byte cache (Redis, memory)
- protection: purpose-scoped token protection for the session cookie
- bridge: create/get/save/delete sessions by key
- middleware: per-request session and shared session adoption
- api: REST API interface
"""

__version__ = "1.0.0"
