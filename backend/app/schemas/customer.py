"""
CustomerBook Backend — Pydantic Request/Response Schemas
==========================================================

What:  Pydantic models defining the JSON contract of the customer API.
Why:   Strict input validation, automatic serialization, and OpenAPI docs.
How:   Python attributes are snake_case; JSON keys are camelCase through an
       alias generator (`date_of_birth` ↔ `dateOfBirth`). FastAPI serializes
       response models by alias.

Design Decision:
    Create and update have separate schemas. Create requires every editable
    field. Update accepts any subset of the same fields and nothing else
    (extra="forbid"), so clients cannot write `id` or `createdAt`.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# member_number is stored in a 32-bit INTEGER column
MEMBER_NUMBER_MIN = -(2**31)
MEMBER_NUMBER_MAX = 2**31 - 1


def _require_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be empty")
    return stripped


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CustomerCreate(BaseModel):
    """
    Body of POST /customers.

    Example:
        {"name": "Ada", "dateOfBirth": "1990-01-01", "memberNumber": 42,
         "interests": "chess, code"}
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: str = Field(max_length=255, description="Customer full name")
    date_of_birth: date = Field(description="Date of birth (YYYY-MM-DD)")
    member_number: int = Field(
        strict=True,
        ge=MEMBER_NUMBER_MIN,
        le=MEMBER_NUMBER_MAX,
        description="Membership number",
    )
    interests: str = Field(description="Comma-separated interests")

    @field_validator("name", "interests")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)


class CustomerUpdate(BaseModel):
    """
    Body of PUT /customers/{id}: any subset of the editable fields.

    Omitted fields keep their stored value. An explicit null is rejected,
    since every stored customer must keep all four fields populated.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: Optional[str] = Field(default=None, max_length=255)
    date_of_birth: Optional[date] = None
    member_number: Optional[int] = Field(
        default=None, strict=True, ge=MEMBER_NUMBER_MIN, le=MEMBER_NUMBER_MAX
    )
    interests: Optional[str] = None

    @field_validator("name", "date_of_birth", "member_number", "interests", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("name", "interests")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by column name."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CustomerResponse(BaseModel):
    """A stored customer, as returned by every customer endpoint."""
    model_config = _camel_config

    id: uuid.UUID = Field(description="Unique customer identifier (UUID)")
    name: str
    date_of_birth: date
    member_number: int
    interests: str
    created_at: datetime = Field(description="When the customer was created (UTC ISO 8601)")

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite returns naive datetimes; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class MessageResponse(BaseModel):
    """Confirmation body, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """Every error body: `{"error": "Customer not found"}`."""
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
