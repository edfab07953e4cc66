"""Correlation ID management.

HTTP requests are correlated by the X-Request-ID header, queue messages by
the envelope id. Every log record carries the current value.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "no-request-id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current correlation ID, or "no-request-id" outside a request or message."""
    return request_id_var.get() or NO_REQUEST_ID


@contextmanager
def correlation_scope(correlation_id: Optional[str]) -> Iterator[str]:
    """Correlate everything logged inside the block with the given ID.

    The previous value is restored on exit, so a worker process does not leak
    one envelope's id into the logs of the next message.

    Example:
        with correlation_scope(envelope.id):
            handler.handle_envelope(envelope)
    """
    token = request_id_var.set(correlation_id)
    try:
        yield get_request_id()
    finally:
        request_id_var.reset(token)
