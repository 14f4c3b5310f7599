"""
OmniCognitor Gateway: Resource Registry
========================================

What:  Declares the five resources the gateway exposes and how each maps to
       an upstream table.
How:   One frozen `ResourceDefinition` per resource. Routes and services
       iterate this registry, so adding a resource means adding one entry.

    public path      upstream table   list limit   list filters
    ─────────────    ──────────────   ──────────   ─────────────────────────────
    users            users            10           -
    platforms        platform         20           -
    workspaces       projects         20           -
    conversations    conversation     20           workspaceId → workspace_id
    messages         messages         50           conversationId → conversation_id
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Type

from omnicognitor.schemas.resources import (
    CreateConversationRequest,
    CreateMessageRequest,
    CreatePlatformRequest,
    CreateRequest,
    CreateUserRequest,
    CreateWorkspaceRequest,
)


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Attributes:
        name:          Public path segment (`/api/<name>`)
        table:         Upstream table name
        list_limit:    Fixed row limit for list requests (no pagination)
        create_schema: Body model for POST
        list_filters:  Query parameter → column, applied as `eq.` filters
    """

    name: str
    table: str
    list_limit: int
    create_schema: Type[CreateRequest]
    list_filters: Mapping[str, str] = field(default_factory=dict)

    def filters_from_query(self, query: Mapping[str, str]) -> Dict[str, str]:
        """Translate supported, non-empty query parameters into PostgREST filters."""
        filters = {}
        for param, column in self.list_filters.items():
            value = query.get(param)
            if value:
                filters[column] = f"eq.{value}"
        return filters


RESOURCES: Tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        name="users",
        table="users",
        list_limit=10,
        create_schema=CreateUserRequest,
    ),
    ResourceDefinition(
        name="platforms",
        table="platform",
        list_limit=20,
        create_schema=CreatePlatformRequest,
    ),
    ResourceDefinition(
        name="workspaces",
        table="projects",
        list_limit=20,
        create_schema=CreateWorkspaceRequest,
    ),
    ResourceDefinition(
        name="conversations",
        table="conversation",
        list_limit=20,
        create_schema=CreateConversationRequest,
        list_filters={"workspaceId": "workspace_id"},
    ),
    ResourceDefinition(
        name="messages",
        table="messages",
        list_limit=50,
        create_schema=CreateMessageRequest,
        list_filters={"conversationId": "conversation_id"},
    ),
)

RESOURCES_BY_NAME: Dict[str, ResourceDefinition] = {r.name: r for r in RESOURCES}

# Tables reported by GET /stats
STATS_TABLES: Tuple[str, ...] = tuple(r.table for r in RESOURCES)


def get_resource(name: str) -> Optional[ResourceDefinition]:
    return RESOURCES_BY_NAME.get(name)
