"""
OmniCognitor Gateway: Response Envelopes
=========================================

What:  Pydantic models for every JSON body the gateway returns.
How:   Handlers build one of these and serialize it with `model_dump()`.
       Every envelope carries `success`; payloads live under `data`, `stats`
       or `error`.

Example:
    {"success": true, "data": [{"id": 1, "username": "alice"}]}
    {"success": false, "error": "Username is required"}
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class DataResponse(BaseModel):
    """List and create results: upstream rows passed through untouched."""

    success: bool = True
    data: Any = Field(default=None, description="Rows returned by the data API")


class ErrorResponse(BaseModel):
    """
    Error envelope for all failures.

    `error` is a string for locally raised errors and the upstream body
    (often an object with `code`, `message`, `details`, `hint`) for
    upstream failures.
    """

    success: bool = False
    error: Any = Field(description="Error message or upstream error body")


class StatsResponse(BaseModel):
    success: bool = True
    stats: Dict[str, int] = Field(description="Upstream table name → row count")


class IndexResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """
    Liveness check. No upstream call is made, so this answers even when the
    data API is unreachable.
    """

    success: bool = True
    status: str = Field(default="ok")
    timestamp: str = Field(description="Current time, ISO 8601 UTC")
    service: str
    version: str
    uptime_seconds: float = Field(description="Seconds since the module loaded")


class InfoResponse(BaseModel):
    success: bool = True
    name: str
    version: str
    status: str = Field(default="running")
    database: str
    features: List[str]
    infrastructure: str
