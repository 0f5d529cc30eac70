"""
Storefront API - Echo Function and Proxy Tests
================================================

What:  The bundled echo handler, EchoService in both modes, and GET /say.
How:   Remote calls go through httpx.MockTransport; no network access.
"""

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront_api.exceptions import EchoFunctionError
from storefront_api.functions import echo
from storefront_api.main import create_app
from storefront_api.services.echo_service import EchoService

FUNCTION_URL = "http://echo.test/say"


def _remote_service(handler) -> EchoService:
    return EchoService(function_url=FUNCTION_URL, transport=httpx.MockTransport(handler))


class TestEchoHandler:

    def test_keyword(self):
        result = echo.handler({"queryStringParameters": {"keyword": "hello"}})
        assert result == {"statusCode": 200, "body": "Serina Oswalt says hello"}

    @pytest.mark.parametrize(
        "event",
        [
            {},
            {"queryStringParameters": None},
            {"queryStringParameters": {}},
            {"queryStringParameters": {"keyword": ""}},
        ],
    )
    def test_default_keyword(self, event):
        assert echo.handler(event)["body"] == "Serina Oswalt says nothing"


class TestEchoService:

    @pytest.mark.asyncio
    async def test_local_mode(self):
        service = EchoService()
        assert not service.is_remote
        assert await service.say("hi") == "Serina Oswalt says hi"

    @pytest.mark.asyncio
    async def test_remote_mode_forwards_keyword(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["keyword"] = request.url.params["keyword"]
            seen["path"] = request.url.path
            return httpx.Response(200, text="Someone says howdy")

        service = _remote_service(handler)

        assert service.is_remote
        assert await service.say("howdy") == "Someone says howdy"
        assert seen == {"keyword": "howdy", "path": "/say"}

    @pytest.mark.asyncio
    async def test_remote_error_status(self):
        service = _remote_service(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(EchoFunctionError) as exc_info:
            await service.say("hi")
        assert "503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_remote_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(EchoFunctionError, match="Connection refused"):
            await _remote_service(handler).say("hi")


@pytest_asyncio.fixture
async def failing_echo_client(test_settings, database):
    service = _remote_service(lambda request: httpx.Response(502, text="bad gateway"))
    app = create_app(test_settings, database=database, echo_service=service)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestSayRoute:

    @pytest.mark.asyncio
    async def test_say(self, test_client):
        response = await test_client.get("/say", params={"keyword": "hello"})

        assert response.status_code == 200
        assert response.json() == {"message": "Serina Oswalt says hello"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "?keyword=", "?keyword=%20"])
    async def test_missing_keyword(self, test_client, query):
        response = await test_client.get(f"/say{query}")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing 'keyword' parameter"

    @pytest.mark.asyncio
    async def test_upstream_failure(self, failing_echo_client):
        response = await failing_echo_client.get("/say", params={"keyword": "hello"})

        assert response.status_code == 500
        assert response.json()["error"] == "echo_function_error"
