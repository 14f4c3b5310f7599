"""
OmniCognitor Gateway: Application Configuration
================================================

What:  Centralized configuration using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file), coerces
       and validates them, and produces one immutable `Settings` object.
Who:   Constructed once at process start by `create_app()` and handed to every
       handler through the request context. Handlers never read the
       environment themselves.

Environment variables:
    SUPABASE_URL               Base URL of the upstream data API
    SUPABASE_SERVICE_ROLE_KEY  Service credential used for upstream calls
    ALLOW_PUBLIC_WRITE         "true" permits writes without a credential
                               (non-production testing only)
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables.

    All fields have development defaults. Writes stay disabled until either
    a service credential is configured or the public-write override is set.
    """

    # ── Upstream Data API ─────────────────────────────────────────────────
    # Format: https://<project>.supabase.co (REST lives under /rest/v1)
    supabase_url: str = Field(
        default="https://vrfyjirddfdnwuffzqhb.supabase.co",
        description="Base URL of the hosted database REST API",
    )

    # Sent as both `apikey` and `Authorization: Bearer` on every upstream call
    supabase_service_role_key: str = Field(
        default="",
        description="Service credential granting write access upstream",
    )

    allow_public_write: bool = Field(
        default=False,
        description="Permit writes without a service credential (testing only)",
    )

    # Seconds; applies to connect, read and write phases of the upstream call
    upstream_timeout: float = Field(default=10.0, ge=1.0, le=120.0)

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are appended as `/rest/v1/...`, so the base must not end in `/`."""
        return v.strip().rstrip("/")

    # ── Service Identity ──────────────────────────────────────────────────
    service_name: str = Field(default="TELsTP OmniCognitor Backend")
    database_label: str = Field(default="Supabase (PostgreSQL)")
    infrastructure_label: str = Field(default="Supabase REST gateway")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def rest_base_url(self) -> str:
        """Root of the upstream REST interface."""
        return f"{self.supabase_url}/rest/v1"

    @property
    def writes_enabled(self) -> bool:
        """True when create handlers may forward inserts upstream."""
        return bool(self.supabase_service_role_key) or self.allow_public_write

    def warn_on_risky_config(self) -> List[str]:
        """
        What:  Lists configuration states an operator should know about.
        When:  Called during app startup (lifespan); each entry is logged.
        """
        warnings = []
        if not self.writes_enabled:
            warnings.append(
                "SUPABASE_SERVICE_ROLE_KEY is not set and ALLOW_PUBLIC_WRITE is off; "
                "all POST requests will be rejected with 401"
            )
        if self.allow_public_write:
            warnings.append(
                "ALLOW_PUBLIC_WRITE is enabled; writes are accepted without a "
                "service credential. Do not use this in production"
            )
        return warnings
