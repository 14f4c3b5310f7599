"""
OmniCognitor Gateway: Route Table & Dispatch
=============================================

What:  Maps `(method, normalized path)` to a handler in one dictionary lookup.
How:   The request path is split into segments and everything up to and
       including the first `api` segment is dropped, so the gateway answers
       the same whether it is mounted at `/`, `/api` or
       `/functions/v1/api`. The remaining segments, joined with `/`, form the
       route key together with the upper-cased method.

    /functions/v1/api/users  →  ["users"]      →  ("GET", "users")
    /api                     →  []             →  ("GET", "")
    /users/42                →  ["users", "42"] →  no route → 404

Dispatch contract:
    - No matching key            → NotFoundError (404 "Not found")
    - Handler raises GatewayError → propagated to the global handlers
    - Handler raises anything else → UnhandledError (500, message preserved)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, Tuple

from starlette.requests import Request
from starlette.responses import Response

from omnicognitor.config import Settings
from omnicognitor.exceptions import GatewayError, NotFoundError, UnhandledError
from omnicognitor.services.data_api import DataAPIClient
from omnicognitor.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

API_SEGMENT = "api"


def normalize_segments(path: str) -> List[str]:
    """Split a URL path and strip any prefix ending in the `api` segment."""
    raw = [segment for segment in path.split("/") if segment]
    if API_SEGMENT in raw:
        return raw[raw.index(API_SEGMENT) + 1:]
    return raw


@dataclass
class RequestContext:
    """Everything a handler may use; built once per request."""

    request: Request
    settings: Settings
    data_api: DataAPIClient
    segments: List[str] = field(default_factory=list)

    @property
    def service(self) -> ResourceService:
        return ResourceService(self.settings, self.data_api)

    async def json_body(self) -> Optional[Any]:
        """Decoded JSON body, or None when the body is empty or not JSON."""
        try:
            return await self.request.json()
        except ValueError:
            return None


Handler = Callable[[RequestContext], Awaitable[Response]]
RouteKey = Tuple[str, str]


class RouteTable:
    """
    Flat `(METHOD, path)` → handler mapping.

    Paths are stored without leading or trailing slashes; the API root is
    the empty string.
    """

    def __init__(self) -> None:
        self._routes: Dict[RouteKey, Handler] = {}

    @staticmethod
    def make_key(method: str, path: str) -> RouteKey:
        return method.upper(), path.strip("/")

    def add(self, method: str, path: str, handler: Handler) -> None:
        key = self.make_key(method, path)
        if key in self._routes:
            raise ValueError(f"Route already registered: {key[0]} /{key[1]}")
        self._routes[key] = handler

    def resolve(self, method: str, segments: List[str]) -> Handler:
        """
        Raises:
            NotFoundError: no handler for this method and path (→ 404)
        """
        path = "/".join(segments)
        handler = self._routes.get((method.upper(), path))
        if handler is None:
            raise NotFoundError(method=method.upper(), path=f"/{path}")
        return handler

    def keys(self) -> List[RouteKey]:
        return sorted(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __iter__(self) -> Iterator[RouteKey]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._routes)


async def dispatch(table: RouteTable, ctx: RequestContext) -> Response:
    """
    Resolve and run the handler for `ctx.request`.

    Any exception that is not already a GatewayError is logged with its
    traceback and re-raised as UnhandledError so the client receives a JSON
    500 carrying the exception message.
    """
    method = ctx.request.method
    try:
        handler = table.resolve(method, ctx.segments)
        return await handler(ctx)
    except GatewayError:
        raise
    except Exception as e:
        logger.error(
            "Unhandled error in %s /%s: %s",
            method,
            "/".join(ctx.segments),
            e,
            exc_info=True,
        )
        raise UnhandledError(
            message=str(e) or type(e).__name__,
            context={"exception": type(e).__name__},
        ) from e
