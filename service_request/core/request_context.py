"""
Request ID propagation for internal calls.

ServiceRequest.request_scope() binds the id of the request being handled
for the duration of the handler; every log record emitted meanwhile is
tagged with it by JsonLogFormatter. Nested scopes restore the outer id on
exit, so a sub-call dispatched from a handler does not leak its id back.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_request_id_var: ContextVar[Optional[str]] = ContextVar("service_request_id", default=None)


def get_request_id() -> Optional[str]:
    """Id bound by the innermost active scope, if any."""
    return _request_id_var.get()


def new_request_id() -> str:
    return uuid.uuid4().hex


@contextmanager
def bind_request_id(request_id: str) -> Iterator[str]:
    token = _request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        _request_id_var.reset(token)


def clear_request_id() -> None:
    _request_id_var.set(None)
