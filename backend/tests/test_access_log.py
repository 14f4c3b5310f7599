"""
OmniCognitor Gateway: Access Log Tests
=======================================

What we test:
    ✅ One line per request, keyed by the normalized route
    ✅ Level follows the status class
    ✅ Health checks are not logged
"""

import logging

import pytest

from omnicognitor.middleware.logging import level_for_status

ACCESS_LOGGER = "omnicognitor.access"


def access_records(caplog):
    return [r for r in caplog.records if r.name == ACCESS_LOGGER]


class TestLevelForStatus:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (304, logging.INFO),
         (401, logging.WARNING), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_levels(self, status, level):
        assert level_for_status(status) == level


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_route_is_normalized(self, test_client, upstream, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
        upstream.on("GET", "users", json=[])

        await test_client.get("/functions/v1/api/users", headers={"X-Request-ID": "rid-1"})

        [record] = access_records(caplog)
        assert record.levelno == logging.INFO
        assert record.route == "/users"
        assert record.path == "/functions/v1/api/users"
        assert record.status == 200
        assert record.request_id == "rid-1"

    @pytest.mark.asyncio
    async def test_client_errors_log_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/api/nowhere")

        [record] = access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.status == 404

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        response = await test_client.get("/api/health")

        assert response.status_code == 200
        assert access_records(caplog) == []
