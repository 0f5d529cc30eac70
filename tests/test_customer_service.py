"""
Storefront API - Customer Service Unit Tests
==============================================

What:  Tests for CustomerService repository operations.
How:   Uses mock DB sessions (no real DB). Row counts come from the mocked
       execute() result.

What we test:
    ✅ Create inserts, commits and returns the record
    ✅ Duplicate key → ConflictError (a PersistenceError)
    ✅ Store failure → PersistenceError with the driver message
    ✅ Partial update with no fields never touches the session
    ✅ Zero matched rows → NotFoundError, nothing committed
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront_api.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront_api.schemas.customer import CustomerRecord
from storefront_api.services.customer_service import CustomerService


def _compiled(stmt):
    compiled = stmt.compile()
    return str(compiled), compiled.params


class TestCustomerServiceCreate:
    """Tests for create()."""

    def setup_method(self):
        self.service = CustomerService()
        self.record = CustomerRecord(cust_code="c1", cust_name="Jane Doe", cust_city="New York")

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db_session):
        result = await self.service.create(mock_db_session, self.record)

        assert result == self.record
        mock_db_session.execute.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

        sql, params = _compiled(mock_db_session.execute.await_args.args[0])
        assert sql.startswith("INSERT INTO customer")
        assert params == {"cust_code": "c1", "cust_name": "Jane Doe", "cust_city": "New York"}

    @pytest.mark.asyncio
    async def test_create_duplicate_raises_conflict(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=IntegrityError(
                "INSERT INTO customer", {}, Exception("Duplicate entry 'c1' for key 'PRIMARY'")
            )
        )

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create(mock_db_session, self.record)

        assert isinstance(exc_info.value, PersistenceError)
        assert exc_info.value.message == "Duplicate entry 'c1' for key 'PRIMARY'"
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("INSERT INTO customer", {}, Exception("Lost connection"))
        )

        with pytest.raises(PersistenceError, match="Lost connection"):
            await self.service.create(mock_db_session, self.record)


class TestCustomerServicePartialUpdate:
    """Tests for partial_update()."""

    def setup_method(self):
        self.service = CustomerService()

    @pytest.mark.asyncio
    async def test_updates_only_supplied_field(self, mock_db_session):
        await self.service.partial_update(mock_db_session, "c1", {"cust_city": "Boston"})

        sql, params = _compiled(mock_db_session.execute.await_args.args[0])
        assert "cust_name" not in sql
        assert params == {"cust_city": "Boston", "cust_code_1": "c1"}
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_fields_never_touches_storage(self, mock_db_session):
        with pytest.raises(ValidationError, match="No updatable fields"):
            await self.service.partial_update(mock_db_session, "c1", {})

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_code_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError, match="Customer not found"):
            await self.service.partial_update(mock_db_session, "nope", {"cust_name": "Jane"})

        mock_db_session.commit.assert_not_awaited()


class TestCustomerServiceReplace:
    """Tests for replace()."""

    def setup_method(self):
        self.service = CustomerService()

    @pytest.mark.asyncio
    async def test_replace_writes_null_city(self, mock_db_session):
        await self.service.replace(
            mock_db_session, CustomerRecord(cust_code="c1", cust_name="Jane")
        )

        sql, params = _compiled(mock_db_session.execute.await_args.args[0])
        assert "cust_city" in sql
        assert params["cust_city"] is None
        assert params["cust_name"] == "Jane"

    @pytest.mark.asyncio
    async def test_replace_unknown_code(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.replace(
                mock_db_session, CustomerRecord(cust_code="nope", cust_name="Jane")
            )


class TestCustomerServiceDelete:
    """Tests for delete()."""

    def setup_method(self):
        self.service = CustomerService()

    @pytest.mark.asyncio
    async def test_delete_success(self, mock_db_session):
        await self.service.delete(mock_db_session, "c1")

        sql, _ = _compiled(mock_db_session.execute.await_args.args[0])
        assert sql.startswith("DELETE FROM customer")
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_unknown_code(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await self.service.delete(mock_db_session, "nope")

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("DELETE FROM customer", {}, Exception("gone away"))
        )

        with pytest.raises(PersistenceError, match="gone away"):
            await self.service.delete(mock_db_session, "c1")
