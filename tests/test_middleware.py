"""
Storefront API - Middleware Tests
===================================

What:  Request ID resolution and the access log line.

What we test:
    ✅ Well-formed client IDs are kept; malformed ones are replaced
    ✅ Keyed customer routes log their cust_code
    ✅ Level follows the status class; /health is not logged
"""

import logging

import pytest

from storefront_api.middleware.logging import customer_code_from_path
from storefront_api.middleware.request_id import resolve_request_id

ACCESS_LOGGER = "storefront.access"


class TestResolveRequestId:

    @pytest.mark.parametrize("incoming", ["abc123", "req-42", "trace.id_7", "x" * 64])
    def test_well_formed_id_kept(self, incoming):
        assert resolve_request_id(incoming) == incoming

    @pytest.mark.parametrize(
        "incoming",
        [None, "", "has space", "line\nbreak", "x" * 65, "quote\"d"],
    )
    def test_malformed_id_replaced(self, incoming):
        rid = resolve_request_id(incoming)
        assert rid != incoming
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_forged_header_not_echoed(self, test_client):
        response = await test_client.get("/customers", headers={"X-Request-ID": "a b c"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] != "a b c"


class TestCustomerCodeFromPath:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/customers/C00013", "C00013"),
            ("/customers/ c1 ", "c1"),
            ("/customers/  ", None),
            ("/customers", None),
            ("/orders", None),
            ("/customers/c1/extra", None),
        ],
    )
    def test_extracts_key(self, path, expected):
        assert customer_code_from_path(path) == expected


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_keyed_route_logs_cust_code(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.delete("/customers/ghost", headers={"X-Request-ID": "req-7"})

        records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
        assert len(records) == 1
        record = records[0]
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert record.cust_code == "ghost"
        assert record.request_id == "req-7"
        assert "cust_code=ghost" in record.getMessage()

    @pytest.mark.asyncio
    async def test_list_route_has_no_cust_code(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

        await test_client.get("/customers")

        record = next(r for r in caplog.records if r.name == ACCESS_LOGGER)
        assert record.levelno == logging.INFO
        assert record.cust_code is None
        assert "cust_code=" not in record.getMessage()

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == ACCESS_LOGGER]
