"""
OmniCognitor Gateway: Request Logging Middleware
=================================================

What:  One access-log line per request, keyed by the normalized route so
       `/functions/v1/api/users` and `/api/users` aggregate as `GET /users`.
How:   Times `call_next` and picks the level from the status class:

           5xx → ERROR    4xx → WARNING    otherwise → INFO

       Preflights never get here (the CORS middleware answers them first)
       and health checks are in QUIET_ROUTES.

Request bodies are never logged; they may carry user content.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from omnicognitor.middleware.request_id import request_id_var
from omnicognitor.routing import normalize_segments

logger = logging.getLogger("omnicognitor.access")

# (method, normalized path) pairs that are served but not logged
QUIET_ROUTES = frozenset({("GET", "health")})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        method = request.method
        route = "/".join(normalize_segments(request.url.path))
        if (method, route) in QUIET_ROUTES:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s /%s → %d %.1fms [%s] from %s",
            method,
            route,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "route": f"/{route}",
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
