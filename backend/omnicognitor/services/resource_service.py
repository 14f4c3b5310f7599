"""
OmniCognitor Gateway: Resource Service
=======================================

What:  Business logic behind the list, create and stats endpoints.
How:   Composes the resource registry with the DataAPIClient. Routes stay
       thin: they extract the query/body and hand it here.
Who:   Called by omnicognitor.routes.resources and omnicognitor.routes.system.

Create flow (POST /api/<resource>):
    ┌─────────────┐    ┌─────────────┐    ┌─────────────┐
    │  Authorize  │───▶│  Validate   │───▶│   Insert    │
    │  (401)      │    │  (400)      │    │  (upstream) │
    └─────────────┘    └─────────────┘    └─────────────┘

    Authorization and validation are local; no network call happens unless
    both pass. Upstream rejections surface as UpstreamError.

Stats flow (GET /api/stats):
    One count per table, concurrently. A failed count is logged and reported
    as 0; it never fails the whole request.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from omnicognitor.config import Settings
from omnicognitor.exceptions import AuthorizationError
from omnicognitor.services.data_api import DataAPIClient
from omnicognitor.services.registry import STATS_TABLES, ResourceDefinition

logger = logging.getLogger(__name__)


class ResourceService:
    """
    Stateless per-request facade over the data API.

    Args:
        settings: Gateway settings (write gate)
        data_api: Shared upstream client
    """

    def __init__(self, settings: Settings, data_api: DataAPIClient):
        self.settings = settings
        self.data_api = data_api

    def ensure_writes_enabled(self) -> None:
        """
        Raises:
            AuthorizationError: no service credential and public-write off (→ 401)
        """
        if not self.settings.writes_enabled:
            raise AuthorizationError()

    async def list_resource(
        self,
        resource: ResourceDefinition,
        query: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Return up to `resource.list_limit` rows, filtered by supported query params."""
        filters = resource.filters_from_query(query or {})
        return await self.data_api.select(
            resource.table,
            limit=resource.list_limit,
            filters=filters,
        )

    async def create_resource(self, resource: ResourceDefinition, body: Any) -> Any:
        """
        Authorize, validate and forward one insert.

        Args:
            body: Decoded JSON body, or None when the body was not valid JSON

        Returns:
            Inserted row(s) as returned by the data API

        Raises:
            AuthorizationError: writes are not enabled (→ 401)
            ValidationError:    required field missing or malformed (→ 400)
            UpstreamError:      the data API rejected the insert
        """
        self.ensure_writes_enabled()
        request = resource.create_schema.from_body(body)
        row = request.to_row()
        logger.info("Creating %s row in table %s", resource.name, resource.table)
        return await self.data_api.insert(resource.table, row)

    async def _safe_count(self, table: str) -> int:
        try:
            return await self.data_api.count(table)
        except Exception as e:
            logger.warning("Count for table %s failed, reporting 0: %s", table, e)
            return 0

    async def collect_stats(self) -> Dict[str, int]:
        """Row count per known table; a failed count becomes 0."""
        counts = await asyncio.gather(*(self._safe_count(t) for t in STATS_TABLES))
        return dict(zip(STATS_TABLES, counts))
