"""
OmniCognitor Gateway: Catch-All Route
======================================

What:  The only FastAPI route. Every path and method lands here and is handed
       to the route table.
How:   Builds a RequestContext from `app.state` (settings, upstream client,
       route table) and calls `dispatch()`.

OPTIONS never reaches this route: the CORS middleware answers it first.
"""

from fastapi import APIRouter, Request
from starlette.responses import Response

from omnicognitor.routing import RequestContext, dispatch, normalize_segments

router = APIRouter(tags=["Gateway"])

GATEWAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


@router.api_route("/{full_path:path}", methods=GATEWAY_METHODS)
async def gateway(full_path: str, request: Request) -> Response:
    state = request.app.state
    ctx = RequestContext(
        request=request,
        settings=state.settings,
        data_api=state.data_api,
        segments=normalize_segments(request.url.path),
    )
    return await dispatch(state.route_table, ctx)
