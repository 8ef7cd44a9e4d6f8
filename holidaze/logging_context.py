"""Selection-session logging context.

Each booking calendar session (one user picking dates on one venue) owns
an id. Records logged inside ``session_scope`` carry it as
``record.session_id`` so a formatter can include ``%(session_id)s``.

Usage:
    session_id = new_session_id("venue-42")
    with session_scope(session_id):
        logger.debug("Range picked")
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

NO_SESSION = "NO_SESSION"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION)


def new_session_id(prefix: str = "SEL") -> str:
    """Generate an id such as ``SEL-3f9a1c2b``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def get_session_id() -> str:
    """Session id active in the current context."""
    return _session_id.get()


@contextmanager
def session_scope(session_id: str) -> Iterator[str]:
    """Make ``session_id`` current for the block, restoring the outer one after."""
    token = _session_id.set(session_id)
    try:
        yield session_id
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Stamps the current session id on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Module logger with SessionIdFilter attached once."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger
