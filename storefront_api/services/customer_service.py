"""
Storefront API - Customer Service (Repository Operations)
===========================================================

What:  Create, partial-update, replace and delete for the `customer` table,
       each addressed by the business key `cust_code`.
How:   Every operation is one parameterized statement on the session the
       route received, committed on success. Values arrive already
       validated and normalized (see services/validation.py).
Who:   Called by routes/customers.py.

Partial update vs replace:
    partial_update() writes only the columns the client sent; every other
    column keeps its value.
    replace() writes the full row state: a missing city is written as NULL.

Error Handling:
    NotFoundError      no row matched the code (matched-row count is 0)
    ConflictError      insert hit an existing code (IntegrityError)
    PersistenceError   any other SQLAlchemy failure, driver message kept
"""

import logging
from typing import Mapping, Optional

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from storefront_api.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    driver_message,
)
from storefront_api.models.customer import Customer
from storefront_api.schemas.customer import CustomerRecord
from storefront_api.services.update_builder import UpdateBuilder
from storefront_api.services.validation import UPDATABLE_FIELDS

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Repository operations for customers.

    Stateless: the session (one pooled connection) is passed into each call.
    """

    table = Customer.__table__

    async def create(self, db: AsyncSession, record: CustomerRecord) -> CustomerRecord:
        """
        Insert a new customer row.

        Args:
            db: Session lent to the current request
            record: Normalized customer from validate_create()

        Returns:
            The record as inserted.

        Raises:
            ConflictError: cust_code already exists
            PersistenceError: any other store failure
        """
        stmt = insert(self.table).values(
            cust_code=record.cust_code,
            cust_name=record.cust_name,
            cust_city=record.cust_city,
        )
        try:
            await db.execute(stmt)
            await db.commit()
        except IntegrityError as e:
            logger.warning("Insert rejected for customer %s: %s", record.cust_code, driver_message(e))
            raise ConflictError(
                resource="Customer",
                resource_id=record.cust_code,
                message=driver_message(e),
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating customer %s: %s", record.cust_code, driver_message(e))
            raise PersistenceError(
                message=driver_message(e),
                context={"operation": "create", "cust_code": record.cust_code},
            )

        logger.info("Customer %s created", record.cust_code)
        return record

    async def partial_update(
        self,
        db: AsyncSession,
        cust_code: str,
        fields: Mapping[str, Optional[str]],
    ) -> None:
        """
        Update only the supplied columns of one customer.

        Args:
            db: Session lent to the current request
            cust_code: Business key of the row to update
            fields: Updatable columns that were explicitly supplied; a None
                    value writes NULL, a missing key leaves the column alone

        Raises:
            ValidationError: no updatable field supplied (storage untouched)
            NotFoundError: no row has this cust_code
            PersistenceError: store failure
        """
        builder = UpdateBuilder(self.table).set_supplied(fields, UPDATABLE_FIELDS)
        if builder.is_empty():
            raise ValidationError(message="No updatable fields", field="body")

        stmt = builder.build(self.table.c.cust_code == cust_code)
        await self._execute_on_existing(db, stmt, cust_code, operation="update")
        logger.info("Customer %s updated (%s)", cust_code, ", ".join(builder.columns))

    async def replace(self, db: AsyncSession, record: CustomerRecord) -> None:
        """
        Overwrite name and city of one customer.

        A None city is written as NULL, clearing any stored value.

        Raises:
            NotFoundError: no row has this cust_code
            PersistenceError: store failure
        """
        stmt = (
            update(self.table)
            .where(self.table.c.cust_code == record.cust_code)
            .values(cust_name=record.cust_name, cust_city=record.cust_city)
        )
        await self._execute_on_existing(db, stmt, record.cust_code, operation="replace")
        logger.info("Customer %s replaced", record.cust_code)

    async def delete(self, db: AsyncSession, cust_code: str) -> None:
        """
        Remove one customer.

        Raises:
            NotFoundError: no row has this cust_code
            PersistenceError: store failure
        """
        stmt = delete(self.table).where(self.table.c.cust_code == cust_code)
        await self._execute_on_existing(db, stmt, cust_code, operation="delete")
        logger.info("Customer %s deleted", cust_code)

    async def _execute_on_existing(
        self,
        db: AsyncSession,
        stmt: Executable,
        cust_code: str,
        operation: str,
    ) -> None:
        """Run a keyed UPDATE/DELETE; zero matched rows means NotFoundError."""
        try:
            result = await db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(resource="Customer", resource_id=cust_code)
            await db.commit()
        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error(
                "Database error during customer %s of %s: %s",
                operation, cust_code, driver_message(e),
            )
            raise PersistenceError(
                message=driver_message(e),
                context={"operation": operation, "cust_code": cust_code},
            )


customer_service = CustomerService()
