"""
OmniCognitor Gateway: Settings Tests
=====================================
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from omnicognitor.config import Settings


def build(**values):
    return Settings(_env_file=None, **values)


class TestSettings:

    def test_trailing_slash_stripped(self):
        settings = build(supabase_url="https://example.supabase.co//")
        assert settings.supabase_url == "https://example.supabase.co"
        assert settings.rest_base_url == "https://example.supabase.co/rest/v1"

    def test_env_variables_are_read(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "from-env")
        monkeypatch.setenv("ALLOW_PUBLIC_WRITE", "true")

        settings = Settings(_env_file=None)

        assert settings.supabase_service_role_key == "from-env"
        assert settings.allow_public_write is True

    @pytest.mark.parametrize(
        "key, public, enabled",
        [
            ("", False, False),
            ("k", False, True),
            ("", True, True),
            ("k", True, True),
        ],
    )
    def test_writes_enabled(self, key, public, enabled):
        settings = build(supabase_service_role_key=key, allow_public_write=public)
        assert settings.writes_enabled is enabled

    def test_warnings_when_writes_disabled(self):
        warnings = build(supabase_service_role_key="", allow_public_write=False).warn_on_risky_config()
        assert len(warnings) == 1
        assert "401" in warnings[0]

    def test_warnings_when_public_write_enabled(self):
        warnings = build(supabase_service_role_key="k", allow_public_write=True).warn_on_risky_config()
        assert len(warnings) == 1
        assert "production" in warnings[0]

    def test_no_warnings_with_credential(self):
        assert build(supabase_service_role_key="k").warn_on_risky_config() == []

    def test_log_level_normalized(self):
        assert build(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            build(log_level="LOUD")
