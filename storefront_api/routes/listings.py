"""
Storefront API - Order and Product Listing Routes
===================================================

What:  GET /orders and GET /products, each returning up to 50 rows.
       Products live in the sample database's `foods` table.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_api.database import get_db_session
from storefront_api.schemas.common import ErrorResponse
from storefront_api.services.listing_service import listing_service

router = APIRouter()

_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.get(
    "/orders",
    tags=["Orders"],
    summary="List orders",
    responses={200: {"description": "Array of orders"}, **_SERVER_ERROR},
)
async def list_orders(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await listing_service.list_orders(db)


@router.get(
    "/products",
    tags=["Products"],
    summary="List products (mapped to foods table)",
    responses={200: {"description": "Array of products"}, **_SERVER_ERROR},
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await listing_service.list_products(db)
