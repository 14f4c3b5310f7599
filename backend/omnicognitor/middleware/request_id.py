"""
OmniCognitor Gateway: Request ID Middleware
============================================

What:  Assigns a correlation id to each request and returns it in the
       `X-Request-ID` response header.
How:   Uses the client's `X-Request-ID` when it is present and sane,
       otherwise the first 8 characters of a fresh UUID4. The id is stored in
       a ContextVar so loggers and exception handlers can read it without the
       Request object.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Longer client-supplied ids are replaced rather than echoed into logs
MAX_CLIENT_ID_LENGTH = 64


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets `request_id_var` and `request.state.request_id` for the request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "").strip()
        if not rid or len(rid) > MAX_CLIENT_ID_LENGTH:
            rid = new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
