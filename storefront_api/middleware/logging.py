"""
Storefront API - Access Log Middleware
========================================

What:  One `storefront.access` line per request with the outcome and, for
       keyed customer routes, the business key it addressed.
How:   Times call_next and picks the level from the status class
       (5xx ERROR, 4xx WARNING, else INFO). Probe traffic on /health is
       skipped.

Record fields (passed as `extra`, so JSON formatters can pick them up):
    request_id, method, path, status, duration_ms, client_ip, cust_code

Request bodies are never logged; they carry customer names and cities.
Example line:
    PATCH /customers/C00013 200 4.2ms [a1b2c3d4] cust_code=C00013 from 10.0.0.7
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront_api.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")

QUIET_PATHS = frozenset({"/health"})

_CUSTOMER_PATH = re.compile(r"^/customers/([^/]+)$")


def customer_code_from_path(path: str) -> Optional[str]:
    """Trimmed cust_code of a /customers/{cust_code} path, else None."""
    match = _CUSTOMER_PATH.match(path)
    if match is None:
        return None
    return match.group(1).strip() or None


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Writes the access log; runs inside RequestIDMiddleware."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get()
        cust_code = customer_code_from_path(path)
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s]%s from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            rid,
            f" cust_code={cust_code}" if cust_code else "",
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "cust_code": cust_code,
            },
        )
        return response
