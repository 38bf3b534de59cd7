"""
CustomerBook Backend — Customer Record Store
==============================================

What:  Persistence of customer rows with field-level validation.
Why:   The only component that touches the `customers` table. Everything
       above it works with validated rows or an absence signal (None/False).
How:   One SQL statement per operation. Updates and deletes use
       UPDATE/DELETE ... RETURNING so each is atomic for the row it touches.
Who:   Called by CustomerService.

Absence vs. failure:
    - Unknown id            → None (get/update) or False (delete)
    - Malformed id          → MalformedIdentifierError
    - Missing/invalid field → ValidationError
    - Driver/SQL failure    → propagates (the service wraps it)
"""

import logging
import uuid
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import MalformedIdentifierError, ValidationError
from app.models.customer import EDITABLE_FIELDS, Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

CreateFields = Union[CustomerCreate, Mapping[str, Any]]
UpdateFields = Union[CustomerUpdate, Mapping[str, Any]]


def parse_customer_id(raw_id: Union[str, uuid.UUID]) -> uuid.UUID:
    """Parses a customer id, raising MalformedIdentifierError if it is not a UUID."""
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise MalformedIdentifierError(raw_id=str(raw_id))


def _validation_error(exc: SchemaValidationError) -> ValidationError:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = f"{field}: {first['msg']}" if field else first["msg"]
    return ValidationError(
        message=message,
        field=field,
        context={"error_count": exc.error_count()},
    )


class CustomerStore:
    """
    CRUD over the `customers` table.

    Stateless: every method receives the request's AsyncSession, and the
    session dependency owns commit/rollback.
    """

    async def create_record(self, db: AsyncSession, fields: CreateFields) -> Customer:
        """
        Validate, assign id and created_at, persist, and return the new row.

        Raises:
            ValidationError: a required field is missing or malformed
        """
        if not isinstance(fields, CustomerCreate):
            try:
                fields = CustomerCreate.model_validate(fields)
            except SchemaValidationError as e:
                raise _validation_error(e)

        customer = Customer(**fields.model_dump())
        db.add(customer)
        # Flush assigns defaults (id, created_at) without committing
        await db.flush()
        logger.info("Customer created: %s", customer.id)
        return customer

    async def get_record(
        self, db: AsyncSession, customer_id: Union[str, uuid.UUID]
    ) -> Optional[Customer]:
        cid = parse_customer_id(customer_id)
        result = await db.execute(select(Customer).where(Customer.id == cid))
        return result.scalar_one_or_none()

    async def list_records(self, db: AsyncSession) -> List[Customer]:
        result = await db.execute(
            select(Customer).order_by(Customer.created_at, Customer.id)
        )
        return list(result.scalars().all())

    async def update_record(
        self,
        db: AsyncSession,
        customer_id: Union[str, uuid.UUID],
        fields: UpdateFields,
    ) -> Optional[Customer]:
        """
        Merge the supplied fields into an existing row.

        Only EDITABLE_FIELDS are accepted. An empty change set returns the
        current row untouched.

        Returns:
            The updated Customer, or None if no row has this id.
        """
        cid = parse_customer_id(customer_id)
        if not isinstance(fields, CustomerUpdate):
            try:
                fields = CustomerUpdate.model_validate(fields)
            except SchemaValidationError as e:
                raise _validation_error(e)

        changes = {k: v for k, v in fields.changes().items() if k in EDITABLE_FIELDS}
        if not changes:
            return await self.get_record(db, cid)

        result = await db.execute(
            update(Customer)
            .where(Customer.id == cid)
            .values(**changes)
            .returning(Customer)
        )
        customer = result.scalar_one_or_none()
        if customer is not None:
            logger.info("Customer %s updated: %s", cid, sorted(changes))
        return customer

    async def delete_record(
        self, db: AsyncSession, customer_id: Union[str, uuid.UUID]
    ) -> bool:
        """Hard-delete a row. Returns False if no row has this id."""
        cid = parse_customer_id(customer_id)
        result = await db.execute(
            delete(Customer).where(Customer.id == cid).returning(Customer.id)
        )
        deleted = result.scalar_one_or_none() is not None
        if deleted:
            logger.info("Customer deleted: %s", cid)
        return deleted


customer_store = CustomerStore()
