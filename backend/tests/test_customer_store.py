"""
CustomerBook Backend — Customer Record Store Tests
====================================================

Runs the store against an in-memory SQLite database.
"""

import uuid
from datetime import date

import pytest

from app.exceptions import MalformedIdentifierError, ValidationError
from app.schemas.customer import CustomerCreate
from app.services.customer_store import CustomerStore, parse_customer_id


def _fields(**overrides):
    fields = {
        "name": "Ada",
        "dateOfBirth": "1990-01-01",
        "memberNumber": 42,
        "interests": "chess, code",
    }
    fields.update(overrides)
    return fields


class TestParseCustomerId:
    def test_accepts_uuid_string(self):
        raw = str(uuid.uuid4())
        assert parse_customer_id(raw) == uuid.UUID(raw)

    def test_rejects_garbage(self):
        with pytest.raises(MalformedIdentifierError) as exc_info:
            parse_customer_id("not-an-id")
        assert exc_info.value.raw_id == "not-an-id"


class TestCreateRecord:
    def setup_method(self):
        self.store = CustomerStore()

    @pytest.mark.asyncio
    async def test_assigns_id_and_created_at(self, db_session):
        customer = await self.store.create_record(db_session, _fields())

        assert isinstance(customer.id, uuid.UUID)
        assert customer.created_at is not None
        assert customer.name == "Ada"
        assert customer.date_of_birth == date(1990, 1, 1)
        assert customer.member_number == 42
        assert customer.interests == "chess, code"

    @pytest.mark.asyncio
    async def test_accepts_schema_instance(self, db_session):
        data = CustomerCreate.model_validate(_fields(name="Grace"))
        customer = await self.store.create_record(db_session, data)
        assert customer.name == "Grace"

    @pytest.mark.asyncio
    async def test_missing_field_raises_validation_error(self, db_session):
        fields = _fields()
        del fields["memberNumber"]

        with pytest.raises(ValidationError) as exc_info:
            await self.store.create_record(db_session, fields)
        assert exc_info.value.field == "memberNumber"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("member_number", [True, 2**40])
    async def test_member_number_must_fit_integer_column(self, db_session, member_number):
        with pytest.raises(ValidationError) as exc_info:
            await self.store.create_record(db_session, _fields(memberNumber=member_number))
        assert exc_info.value.field == "memberNumber"

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, db_session):
        with pytest.raises(ValidationError):
            await self.store.create_record(db_session, _fields(name="   "))

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, db_session):
        first = await self.store.create_record(db_session, _fields())
        second = await self.store.create_record(db_session, _fields())
        assert first.id != second.id


class TestReadRecords:
    def setup_method(self):
        self.store = CustomerStore()

    @pytest.mark.asyncio
    async def test_get_returns_created_row(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        fetched = await self.store.get_record(db_session, str(created.id))
        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.interests == "chess, code"

    @pytest.mark.asyncio
    async def test_get_unknown_id_returns_none(self, db_session):
        assert await self.store.get_record(db_session, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_get_malformed_id_raises(self, db_session):
        with pytest.raises(MalformedIdentifierError):
            await self.store.get_record(db_session, "1234")

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, db_session):
        for name in ("Ada", "Grace", "Linus"):
            await self.store.create_record(db_session, _fields(name=name))
        await db_session.commit()

        customers = await self.store.list_records(db_session)
        assert [c.name for c in customers] == ["Ada", "Grace", "Linus"]


class TestUpdateRecord:
    def setup_method(self):
        self.store = CustomerStore()

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        updated = await self.store.update_record(
            db_session, str(created.id), {"memberNumber": 7}
        )

        assert updated.member_number == 7
        assert updated.name == "Ada"
        assert updated.date_of_birth == date(1990, 1, 1)
        assert updated.interests == "chess, code"
        assert updated.created_at is not None

    @pytest.mark.asyncio
    async def test_empty_update_returns_current_row(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        unchanged = await self.store.update_record(db_session, str(created.id), {})
        assert unchanged.id == created.id
        assert unchanged.name == "Ada"

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, db_session):
        result = await self.store.update_record(db_session, str(uuid.uuid4()), {"name": "X"})
        assert result is None

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        with pytest.raises(ValidationError):
            await self.store.update_record(db_session, str(created.id), {"createdAt": "2020-01-01"})

    @pytest.mark.asyncio
    async def test_null_rejected(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        with pytest.raises(ValidationError):
            await self.store.update_record(db_session, str(created.id), {"name": None})


class TestDeleteRecord:
    def setup_method(self):
        self.store = CustomerStore()

    @pytest.mark.asyncio
    async def test_delete_then_get_is_absent(self, db_session):
        created = await self.store.create_record(db_session, _fields())
        await db_session.commit()

        assert await self.store.delete_record(db_session, str(created.id)) is True
        await db_session.commit()
        assert await self.store.get_record(db_session, str(created.id)) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_returns_false(self, db_session):
        assert await self.store.delete_record(db_session, str(uuid.uuid4())) is False

    @pytest.mark.asyncio
    async def test_delete_malformed_id_raises(self, db_session):
        with pytest.raises(MalformedIdentifierError):
            await self.store.delete_record(db_session, "abc")
