"""
Storefront API - Customer Route Handlers
==========================================

What:  List, create, partially update, replace and delete customers.
How:   Each handler validates input first (services/validation.py), then
       calls CustomerService with the request's pooled session. Errors
       propagate as exceptions and are rendered by the handlers in main.py.

Route Inventory:
    GET    /customers               first 50 rows
    POST   /customers               201 {message, customer}
    PATCH  /customers/{cust_code}   only the supplied fields change
    PUT    /customers/{cust_code}   full replace; omitted city is cleared
    DELETE /customers/{cust_code}
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_api.database import get_db_session
from storefront_api.schemas.common import ErrorResponse, MessageResponse
from storefront_api.schemas.customer import (
    CustomerCreate,
    CustomerCreatedResponse,
    CustomerPatch,
    CustomerReplace,
)
from storefront_api.services.customer_service import customer_service
from storefront_api.services.listing_service import listing_service
from storefront_api.services.validation import (
    validate_code,
    validate_create,
    validate_patch,
    validate_replace,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Customers"])

_ERRORS = {
    400: {"description": "Bad request", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_KEYED_ERRORS = {
    **_ERRORS,
    404: {"description": "Not found", "model": ErrorResponse},
}


@router.get(
    "/customers",
    summary="List customers",
    responses={
        200: {"description": "Array of customers"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)
async def list_customers(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await listing_service.list_customers(db)


@router.post(
    "/customers",
    status_code=status.HTTP_201_CREATED,
    response_model=CustomerCreatedResponse,
    responses={201: {"description": "Created"}, **_ERRORS},
    summary="Create a customer",
)
async def create_customer(
    payload: CustomerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerCreatedResponse:
    """
    Insert a customer.

    cust_code and cust_name are required; name and city are stored in
    title case. A duplicate cust_code fails as a persistence error (500).
    """
    record = validate_create(payload)
    created = await customer_service.create(db, record)
    return CustomerCreatedResponse(message="Customer created", customer=created)


@router.patch(
    "/customers/{cust_code}",
    response_model=MessageResponse,
    responses={200: {"description": "Updated"}, **_KEYED_ERRORS},
    summary="Partially update a customer",
)
async def update_customer(
    payload: CustomerPatch,
    cust_code: str = Path(description="Business key of the customer"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    Change only the fields present in the body.

    A body with neither cust_name nor cust_city is rejected with 400
    before the database is touched.
    """
    code, fields = validate_patch(cust_code, payload)
    await customer_service.partial_update(db, code, fields)
    return MessageResponse(message="Customer updated")


@router.put(
    "/customers/{cust_code}",
    response_model=MessageResponse,
    responses={200: {"description": "Replaced"}, **_KEYED_ERRORS},
    summary="Replace a customer",
)
async def replace_customer(
    payload: CustomerReplace,
    cust_code: str = Path(description="Business key of the customer"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Overwrite name and city; an omitted city is stored as null."""
    record = validate_replace(cust_code, payload)
    await customer_service.replace(db, record)
    return MessageResponse(message="Customer replaced")


@router.delete(
    "/customers/{cust_code}",
    response_model=MessageResponse,
    responses={200: {"description": "Deleted"}, **_KEYED_ERRORS},
    summary="Delete a customer",
)
async def delete_customer(
    cust_code: str = Path(description="Business key of the customer"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    code = validate_code(cust_code)
    await customer_service.delete(db, code)
    return MessageResponse(message="Customer deleted")
