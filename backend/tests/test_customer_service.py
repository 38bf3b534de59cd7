"""
CustomerBook Backend — Customer Service Unit Tests
====================================================

What:  Status mapping in CustomerService: absence → NotFoundError,
       unexpected failures → DatabaseError with the operation's message.
How:   Patches the module-level customer_store; no database involved.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.exceptions import DatabaseError, MalformedIdentifierError, NotFoundError
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.services.customer_service import CustomerService, to_response


class TestCustomerServiceRead:
    def setup_method(self):
        self.service = CustomerService()

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session, customer_row):
        with patch("app.services.customer_service.customer_store") as store:
            store.get_record = AsyncMock(return_value=customer_row)
            result = await self.service.get_customer(mock_db_session, str(customer_row.id))

        assert result.id == customer_row.id
        assert result.member_number == 42
        dumped = result.model_dump(by_alias=True)
        assert dumped["dateOfBirth"] == customer_row.date_of_birth
        assert "createdAt" in dumped

    @pytest.mark.asyncio
    async def test_get_absent_raises_not_found(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.get_record = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError) as exc_info:
                await self.service.get_customer(mock_db_session, str(uuid4()))
        assert exc_info.value.message == "Customer not found"

    @pytest.mark.asyncio
    async def test_malformed_id_passes_through(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.get_record = AsyncMock(side_effect=MalformedIdentifierError("x"))
            with pytest.raises(MalformedIdentifierError):
                await self.service.get_customer(mock_db_session, "x")

    @pytest.mark.asyncio
    async def test_get_db_failure_wrapped(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.get_record = AsyncMock(side_effect=RuntimeError("connection reset"))
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.get_customer(mock_db_session, str(uuid4()))
        assert exc_info.value.message == "Failed to fetch customer"
        assert exc_info.value.context["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_list_failure_wrapped(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.list_records = AsyncMock(side_effect=RuntimeError("boom"))
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.list_customers(mock_db_session)
        assert exc_info.value.message == "Failed to fetch customers"

    @pytest.mark.asyncio
    async def test_list_maps_rows(self, mock_db_session, customer_row):
        with patch("app.services.customer_service.customer_store") as store:
            store.list_records = AsyncMock(return_value=[customer_row, customer_row])
            result = await self.service.list_customers(mock_db_session)
        assert len(result) == 2
        assert result[0].name == "Ada"


class TestCustomerServiceWrite:
    def setup_method(self):
        self.service = CustomerService()

    @pytest.mark.asyncio
    async def test_create_failure_wrapped(self, mock_db_session, sample_customer):
        data = CustomerCreate.model_validate(sample_customer)
        with patch("app.services.customer_service.customer_store") as store:
            store.create_record = AsyncMock(side_effect=RuntimeError("disk full"))
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.create_customer(mock_db_session, data)
        assert exc_info.value.message == "Failed to create customer"

    @pytest.mark.asyncio
    async def test_update_absent_raises_not_found(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.update_record = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError):
                await self.service.update_customer(
                    mock_db_session, str(uuid4()), CustomerUpdate(name="X")
                )

    @pytest.mark.asyncio
    async def test_update_failure_wrapped(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.update_record = AsyncMock(side_effect=RuntimeError("deadlock"))
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.update_customer(
                    mock_db_session, str(uuid4()), CustomerUpdate(name="X")
                )
        assert exc_info.value.message == "Failed to update customer"

    @pytest.mark.asyncio
    async def test_delete_success_message(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.delete_record = AsyncMock(return_value=True)
            result = await self.service.delete_customer(mock_db_session, str(uuid4()))
        assert result.message == "Customer deleted successfully"

    @pytest.mark.asyncio
    async def test_delete_absent_raises_not_found(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.delete_record = AsyncMock(return_value=False)
            with pytest.raises(NotFoundError):
                await self.service.delete_customer(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_delete_failure_wrapped(self, mock_db_session):
        with patch("app.services.customer_service.customer_store") as store:
            store.delete_record = AsyncMock(side_effect=RuntimeError("lock timeout"))
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.delete_customer(mock_db_session, str(uuid4()))
        assert exc_info.value.message == "Failed to delete customer"


class TestResponseTimestamps:
    def test_naive_created_at_is_read_as_utc(self, customer_row):
        aware = customer_row.created_at
        customer_row.created_at = aware.replace(tzinfo=None)

        body = to_response(customer_row).model_dump(mode="json", by_alias=True)

        assert body["createdAt"] == "2024-05-01T10:00:00Z"

    def test_aware_and_naive_serialize_identically(self, customer_row):
        aware_body = to_response(customer_row).model_dump(mode="json", by_alias=True)
        customer_row.created_at = customer_row.created_at.replace(tzinfo=None)
        naive_body = to_response(customer_row).model_dump(mode="json", by_alias=True)

        assert aware_body == naive_body
