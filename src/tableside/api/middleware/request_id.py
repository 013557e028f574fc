from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-Id"

# one of the two is set: request_id for HTTP calls, connection_id for a socket
request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)
connection_id_context: ContextVar[str | None] = ContextVar("connection_id", default=None)


def get_request_id() -> str | None:
    return request_id_context.get()


def get_connection_id() -> str | None:
    return connection_id_context.get()


@contextmanager
def bound_connection_id() -> Iterator[str]:
    connection_id = f"ws_{uuid4().hex[:12]}"
    token = connection_id_context.set(connection_id)
    try:
        yield connection_id
    finally:
        connection_id_context.reset(token)


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        token = request_id_context.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_context.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
