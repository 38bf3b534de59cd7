"""
CustomerBook Backend — Customer SQLAlchemy Model
==================================================

What:  ORM model representing the `customers` table.
Why:   Maps Python objects to database rows; Alembic reads this for migrations.
Who:   Used by CustomerStore for CRUD operations.

Table Design Rationale:
    - UUID primary key generated in Python (uuid4): unique, never reused, and
      portable across PostgreSQL and the SQLite database used in tests
    - interests: one comma-separated string; splitting is a presentation concern
    - created_at: UTC with timezone, assigned on insert and never updated
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Columns a caller may change after creation
EDITABLE_FIELDS = frozenset({"name", "date_of_birth", "member_number", "interests"})


class Customer(Base):
    """
    A customer record.

    Lifecycle:
        1. Created with all four editable fields populated
        2. Updated in place (any subset of EDITABLE_FIELDS)
        3. Hard-deleted; the id is never handed out again
    """

    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned on creation",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Customer full name",
    )

    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar date of birth",
    )

    member_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Loyalty membership number",
    )

    # Free-form tags, e.g. "movies, football, gym"
    interests: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Comma-separated list of interests",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When this customer was created (UTC)",
    )

    # Listing returns rows in insertion order
    __table_args__ = (
        Index("idx_customers_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}', member_number={self.member_number})>"
