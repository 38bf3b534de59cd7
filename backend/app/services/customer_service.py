"""
CustomerBook Backend — Customer Service
=========================================

What:  Business logic behind the /customers endpoints.
Why:   Keeps status-code decisions out of the store and HTTP out of the logic.
How:   Calls exactly one CustomerStore operation per method, converts absence
       into NotFoundError, and wraps unexpected failures into a DatabaseError
       carrying the operation-specific message the API returns.

Error mapping:
    store returns None/False         → NotFoundError("Customer not found")   → 404
    ValidationError / Malformed id   → propagated as-is                      → 400
    anything else                    → DatabaseError("Failed to ...")        → 500
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import CustomerBookError, DatabaseError, NotFoundError
from app.models.customer import Customer
from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    MessageResponse,
)
from app.services.customer_store import customer_store

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Customer not found"
DELETED_MESSAGE = "Customer deleted successfully"


def to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        date_of_birth=customer.date_of_birth,
        member_number=customer.member_number,
        interests=customer.interests,
        created_at=customer.created_at,
    )


@asynccontextmanager
async def _operation(failure_message: str, **context) -> AsyncIterator[None]:
    """
    Boundary for one customer operation.

    Our own exceptions pass through unchanged; any other exception is logged
    with its traceback and replaced by a DatabaseError with `failure_message`.
    """
    try:
        yield
    except CustomerBookError:
        raise
    except Exception as e:
        logger.error("%s: %s", failure_message, str(e), exc_info=True)
        raise DatabaseError(
            message=failure_message,
            context={"error_type": type(e).__name__, **context},
        )


class CustomerService:
    """
    Stateless orchestrator for customer operations.

    Each method receives the request's AsyncSession so tests can pass a mock.
    """

    async def list_customers(self, db: AsyncSession) -> List[CustomerResponse]:
        async with _operation("Failed to fetch customers"):
            customers = await customer_store.list_records(db)
            return [to_response(c) for c in customers]

    async def create_customer(
        self, db: AsyncSession, data: CustomerCreate
    ) -> CustomerResponse:
        async with _operation("Failed to create customer"):
            customer = await customer_store.create_record(db, data)
            return to_response(customer)

    async def get_customer(self, db: AsyncSession, customer_id: str) -> CustomerResponse:
        """
        Raises:
            MalformedIdentifierError: id is not a UUID (→ 400)
            NotFoundError: no customer with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        async with _operation("Failed to fetch customer", customer_id=customer_id):
            customer = await customer_store.get_record(db, customer_id)
            if customer is None:
                raise NotFoundError(NOT_FOUND_MESSAGE, resource_id=customer_id)
            return to_response(customer)

    async def update_customer(
        self, db: AsyncSession, customer_id: str, data: CustomerUpdate
    ) -> CustomerResponse:
        async with _operation("Failed to update customer", customer_id=customer_id):
            customer = await customer_store.update_record(db, customer_id, data)
            if customer is None:
                raise NotFoundError(NOT_FOUND_MESSAGE, resource_id=customer_id)
            return to_response(customer)

    async def delete_customer(self, db: AsyncSession, customer_id: str) -> MessageResponse:
        async with _operation("Failed to delete customer", customer_id=customer_id):
            deleted = await customer_store.delete_record(db, customer_id)
            if not deleted:
                raise NotFoundError(NOT_FOUND_MESSAGE, resource_id=customer_id)
            return MessageResponse(message=DELETED_MESSAGE)


customer_service = CustomerService()
