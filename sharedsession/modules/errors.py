"""Error types shared by the session modules."""


class SharedSessionError(Exception):
    """Base class for all shared session failures."""


class InvalidArgumentError(SharedSessionError, ValueError):
    """A required input was None or empty."""


class ValueParseError(SharedSessionError, ValueError):
    """Stored bytes are not the UTF-8 text of a JSON object."""


class StoreFailureError(SharedSessionError):
    """The session store could not be reached or timed out."""


class CommitFailureError(SharedSessionError):
    """Committing session changes to the store failed."""


class ProtectionError(SharedSessionError):
    """A protected payload could not be unprotected (wrong key or tampered)."""
