"""
OmniCognitor Gateway: Static CORS Middleware
=============================================

What:  Attaches a fixed set of CORS headers to every response and answers
       every OPTIONS request with `200 ok` before routing.
How:   Starlette BaseHTTPMiddleware. The headers never depend on the
       request's Origin: any origin is allowed.

Starlette's CORSMiddleware only short-circuits true preflights (OPTIONS with
Origin and Access-Control-Request-Method); here any OPTIONS, with or without
those headers, gets the same answer.
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class StaticCORSMiddleware(BaseHTTPMiddleware):
    """Short-circuits OPTIONS and stamps CORS headers on everything else."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return PlainTextResponse("ok", status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
