"""
OmniCognitor Gateway: Resource Routes
======================================

What:  GET (list) and POST (create) for every resource in the registry.
How:   Handlers are generated per ResourceDefinition and registered in the
       route table under the resource's public name. They only move data
       between HTTP and ResourceService.

    GET  /api/<resource>   → 200 {"success": true, "data": [...]}
    POST /api/<resource>   → 201 {"success": true, "data": [<inserted row>]}

Error responses (raised by the service, formatted by global handlers):
    400 missing/invalid field, 401 writes disabled, upstream status passthrough
"""

from fastapi.responses import JSONResponse

from omnicognitor.routing import Handler, RequestContext, RouteTable
from omnicognitor.schemas.responses import DataResponse
from omnicognitor.services.registry import RESOURCES, ResourceDefinition


def make_list_handler(resource: ResourceDefinition) -> Handler:
    async def list_handler(ctx: RequestContext) -> JSONResponse:
        data = await ctx.service.list_resource(resource, ctx.request.query_params)
        return JSONResponse(DataResponse(data=data).model_dump())

    list_handler.__name__ = f"list_{resource.name}"
    return list_handler


def make_create_handler(resource: ResourceDefinition) -> Handler:
    async def create_handler(ctx: RequestContext) -> JSONResponse:
        body = await ctx.json_body()
        data = await ctx.service.create_resource(resource, body)
        return JSONResponse(DataResponse(data=data).model_dump(), status_code=201)

    create_handler.__name__ = f"create_{resource.name}"
    return create_handler


def register(table: RouteTable) -> None:
    for resource in RESOURCES:
        table.add("GET", resource.name, make_list_handler(resource))
        table.add("POST", resource.name, make_create_handler(resource))
