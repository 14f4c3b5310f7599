"""
OmniCognitor Gateway: Upstream Data API Client
===============================================

What:  Async client for the hosted database's REST interface (PostgREST).
How:   Wraps one pooled `httpx.AsyncClient` rooted at `<SUPABASE_URL>/rest/v1`.
       Every call attaches the service credential (when configured) and
       decodes the response body as JSON, falling back to raw text.
Who:   Used by ResourceService; created once per application by create_app()
       and closed in the lifespan shutdown.

PostgREST conventions used here:
    GET  /<table>?select=*&limit=N&<col>=eq.<v>   list rows
    POST /<table>  (Prefer: return=representation) insert, echo inserted rows
    GET  /<table>?select=*&limit=1 (Prefer: count=exact)
         → Content-Range: 0-0/<total>               row count

No retries: one call per operation, bounded only by the client timeout.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from omnicognitor.config import Settings
from omnicognitor.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# Total after the slash in "0-9/42" or "*/0"
_CONTENT_RANGE_TOTAL = re.compile(r"/(\d+)$")


@dataclass
class UpstreamResponse:
    """Decoded result of one upstream call."""

    status_code: int
    body: Any
    headers: httpx.Headers

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


def decode_body(response: httpx.Response) -> Any:
    """
    Decode an upstream body: JSON when possible, raw text otherwise.

    An empty body decodes to None.
    """
    text = response.text
    if not text:
        return None
    try:
        return response.json()
    except ValueError:
        return text


def parse_content_range_total(header: Optional[str]) -> Optional[int]:
    """Extract the total row count from a Content-Range header, if present."""
    if not header:
        return None
    match = _CONTENT_RANGE_TOTAL.search(header.strip())
    if not match:
        return None
    return int(match.group(1))


class DataAPIClient:
    """
    Thin async wrapper over the PostgREST endpoint.

    Args:
        settings:  Gateway settings (base URL, credential, timeout)
        transport: Optional httpx transport; tests pass `httpx.MockTransport`
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.rest_base_url,
            timeout=settings.upstream_timeout,
            transport=transport,
        )

    def _headers(
        self,
        prefer: Optional[str] = None,
        has_body: bool = False,
    ) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        key = self.settings.supabase_service_role_key
        if key:
            headers["apikey"] = key
            headers["Authorization"] = f"Bearer {key}"
        if has_body:
            headers["Content-Type"] = "application/json"
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def request(
        self,
        method: str,
        table: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> UpstreamResponse:
        """
        Issue one call against `/<table>` and decode the response.

        Does not raise on 4xx/5xx; callers decide. Transport failures
        (connect errors, timeouts) propagate as `httpx.HTTPError`.
        """
        has_body = json is not None
        logger.debug("Upstream %s /%s params=%s", method, table, dict(params or {}))
        response = await self._client.request(
            method,
            f"/{table}",
            params=params,
            json=json,
            headers=self._headers(prefer=prefer, has_body=has_body),
        )
        result = UpstreamResponse(
            status_code=response.status_code,
            body=decode_body(response),
            headers=response.headers,
        )
        if result.is_error:
            logger.warning(
                "Upstream %s /%s failed with HTTP %d: %s",
                method,
                table,
                result.status_code,
                result.body,
            )
        return result

    async def select(
        self,
        table: str,
        limit: int,
        filters: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        List up to `limit` rows of `table`.

        Args:
            filters: column → PostgREST operator expression (e.g. "eq.42")

        Raises:
            UpstreamError: the data API answered with 4xx/5xx
        """
        params: Dict[str, Any] = {"select": "*"}
        params.update(filters or {})
        params["limit"] = limit

        result = await self.request("GET", table, params=params)
        if result.is_error:
            raise UpstreamError(result.status_code, result.body, context={"table": table})
        return result.body

    async def insert(self, table: str, row: Mapping[str, Any]) -> Any:
        """
        Insert one row and return the inserted representation.

        Raises:
            UpstreamError: the data API rejected the insert (constraint
                violation, RLS denial, unknown column, ...)
        """
        result = await self.request(
            "POST",
            table,
            json=dict(row),
            prefer="return=representation",
        )
        if result.is_error:
            raise UpstreamError(result.status_code, result.body, context={"table": table})
        return result.body

    async def count(self, table: str) -> int:
        """
        Count rows of `table`.

        Reads the exact total from Content-Range; without that header, falls
        back to the length of a list body, else 0.

        Raises:
            UpstreamError: the data API answered with 4xx/5xx
        """
        result = await self.request(
            "GET",
            table,
            params={"select": "*", "limit": 1},
            prefer="count=exact",
        )
        if result.is_error:
            raise UpstreamError(result.status_code, result.body, context={"table": table})

        total = parse_content_range_total(result.headers.get("content-range"))
        if total is not None:
            return total
        if isinstance(result.body, list):
            return len(result.body)
        return 0

    async def aclose(self) -> None:
        """Close pooled connections. Called from the lifespan shutdown."""
        await self._client.aclose()
