"""Errors raised by the session store."""


class SessionStoreError(RuntimeError):
    """The session store is unavailable or rejected the operation."""


class SessionConflictError(SessionStoreError):
    """A uniqueness constraint on the session store was violated."""
