"""
CustomerBook Backend — Customer API Route Handlers
====================================================

What:  JSON CRUD endpoints under /customers.
How:   Thin handlers: extract path/body, delegate to CustomerService, set the
       status code. Errors are raised by the service and turned into
       `{"error": ...}` bodies by the handlers in main.py.
Who:   Called by the browser UI (through CustomerApiClient) and any other
       HTTP client.

Ids are taken as plain strings so a malformed id reaches the store and is
reported as `{"error": "Invalid customer id"}` (400) instead of FastAPI's
default 422 body.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    ErrorResponse,
    MessageResponse,
)
from app.services.customer_service import customer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])

_id_errors = {
    400: {"description": "Malformed id or invalid fields", "model": ErrorResponse},
    404: {"description": "Customer not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[CustomerResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all customers",
)
async def list_customers(
    db: AsyncSession = Depends(get_db_session),
) -> List[CustomerResponse]:
    """All customers in insertion order. No pagination."""
    return await customer_service.list_customers(db)


@router.post(
    "",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a customer",
)
async def create_customer(
    body: CustomerCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.create_customer(db, body)


@router.get(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses=_id_errors,
    summary="Get a customer by id",
)
async def get_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.get_customer(db, customer_id)


@router.put(
    "/{customer_id}",
    response_model=CustomerResponse,
    responses=_id_errors,
    summary="Update a customer",
    description=(
        "Accepts any subset of name, dateOfBirth, memberNumber and interests. "
        "Omitted fields keep their current value; any other field is rejected."
    ),
)
async def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.update_customer(db, customer_id, body)


@router.delete(
    "/{customer_id}",
    response_model=MessageResponse,
    responses=_id_errors,
    summary="Delete a customer",
)
async def delete_customer(
    customer_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await customer_service.delete_customer(db, customer_id)
