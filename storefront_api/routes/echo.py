"""
Storefront API - Echo Proxy Route
===================================

What:  GET /say?keyword=... returns the echo function's reply.
How:   Delegates to the EchoService built by create_app().
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from storefront_api.exceptions import ValidationError
from storefront_api.schemas.common import EchoResponse, ErrorResponse
from storefront_api.services.echo_service import EchoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Echo"])


def get_echo_service(request: Request) -> EchoService:
    return request.app.state.echo_service


@router.get(
    "/say",
    response_model=EchoResponse,
    responses={
        200: {"description": "Message from the echo function"},
        400: {"description": "Missing keyword", "model": ErrorResponse},
        500: {"description": "Echo function failed", "model": ErrorResponse},
    },
    summary="Returns a message using the echo function",
)
async def say(
    keyword: Optional[str] = Query(
        default=None,
        description="A keyword to include in the message",
    ),
    echo_service: EchoService = Depends(get_echo_service),
) -> EchoResponse:
    if keyword is None or not keyword.strip():
        raise ValidationError(message="Missing 'keyword' parameter", field="keyword")

    message = await echo_service.say(keyword)
    return EchoResponse(message=message)
