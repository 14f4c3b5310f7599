"""
OmniCognitor Gateway: System Routes
====================================

What:  Service-level endpoints that do not belong to a resource.

    GET /api          index: lists available endpoints
    GET /api/health   liveness check (no upstream call)
    GET /api/info     static service description
    GET /api/stats    row count per upstream table
"""

import logging
import time
from datetime import datetime, timezone

from fastapi.responses import JSONResponse

from omnicognitor import __version__
from omnicognitor.routing import RequestContext, RouteTable
from omnicognitor.schemas.responses import (
    HealthResponse,
    IndexResponse,
    InfoResponse,
    StatsResponse,
)
from omnicognitor.services.registry import RESOURCES

logger = logging.getLogger(__name__)

# Uptime is measured from module load
_start_time = time.time()

FEATURES = [
    "Multi-platform AI",
    "Workspace Management",
    "Message Chaining",
]


def available_endpoints() -> str:
    paths = ["health", "info", "stats"] + [r.name for r in RESOURCES]
    return ", ".join(f"/api/{p}" for p in paths)


async def index(ctx: RequestContext) -> JSONResponse:
    body = IndexResponse(message=f"API root. Available: {available_endpoints()}")
    return JSONResponse(body.model_dump())


async def health(ctx: RequestContext) -> JSONResponse:
    body = HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=ctx.settings.service_name,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(body.model_dump())


async def info(ctx: RequestContext) -> JSONResponse:
    body = InfoResponse(
        name=ctx.settings.service_name,
        version=__version__,
        database=ctx.settings.database_label,
        features=FEATURES,
        infrastructure=ctx.settings.infrastructure_label,
    )
    return JSONResponse(body.model_dump())


async def stats(ctx: RequestContext) -> JSONResponse:
    """
    Count rows in every known table.

    Per-table failures are reported as 0 (see ResourceService.collect_stats);
    this endpoint itself only fails on a bug.
    """
    counts = await ctx.service.collect_stats()
    return JSONResponse(StatsResponse(stats=counts).model_dump())


def register(table: RouteTable) -> None:
    table.add("GET", "", index)
    table.add("GET", "health", health)
    table.add("GET", "info", info)
    table.add("GET", "stats", stats)
