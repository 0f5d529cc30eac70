"""
Storefront API - Echo Service
===============================

What:  Calls the echo function on behalf of GET /say.
How:   With a function URL configured, sends `GET <url>?keyword=...` through
       an httpx.AsyncClient and returns the response text. Without one, the
       bundled handler in functions/echo.py runs in-process.
Who:   Built once by create_app() and stored on `app.state.echo_service`.

Error Handling:
    Network errors, timeouts and non-2xx answers become EchoFunctionError
    (500) with the httpx message. No retry.
"""

import logging
from typing import Optional

import httpx

from storefront_api.exceptions import EchoFunctionError
from storefront_api.functions import echo

logger = logging.getLogger(__name__)


class EchoService:
    """Client for the echo function, remote or in-process."""

    def __init__(
        self,
        function_url: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.function_url = function_url
        self.timeout = timeout
        # Tests inject httpx.MockTransport here
        self._transport = transport

    @property
    def is_remote(self) -> bool:
        return bool(self.function_url)

    async def say(self, keyword: str) -> str:
        """
        Return the echo function's body for `keyword`.

        Raises:
            EchoFunctionError: the remote call failed
        """
        if not self.is_remote:
            result = echo.handler({"queryStringParameters": {"keyword": keyword}})
            return result["body"]

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.function_url, params={"keyword": keyword})
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Echo function call to %s failed: %s", self.function_url, str(e))
            raise EchoFunctionError(
                message=str(e) or "Echo function call failed",
                context={"url": self.function_url, "error_type": type(e).__name__},
            )

        return response.text
