"""
Storefront API - Listing Service
==================================

What:  Bulk reads for customers, orders and products.
How:   SELECT every column of the table, capped at LIST_LIMIT rows, in
       whatever order the database returns them. No filters, sorting or
       pagination cursor.
Who:   Called by the GET list routes.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_api.exceptions import PersistenceError, driver_message
from storefront_api.models import Customer, Order, Product

logger = logging.getLogger(__name__)

LIST_LIMIT = 50


class ListingService:
    """Read-only bulk fetches, one method per exposed resource."""

    async def list_customers(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._first_rows(db, Customer.__table__)

    async def list_orders(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._first_rows(db, Order.__table__)

    async def list_products(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self._first_rows(db, Product.__table__)

    async def _first_rows(self, db: AsyncSession, table: Table) -> List[Dict[str, Any]]:
        """
        Fetch up to LIST_LIMIT rows of `table` as plain dicts.

        Raises:
            PersistenceError: the query failed (driver message kept)
        """
        try:
            result = await db.execute(select(table).limit(LIST_LIMIT))
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            message = driver_message(e)
            logger.error("Database error listing %s: %s", table.name, message)
            raise PersistenceError(message=message, context={"table": table.name})


listing_service = ListingService()
