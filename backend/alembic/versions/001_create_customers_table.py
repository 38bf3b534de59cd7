"""Create customers table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `customers` table and its created_at index.
Rollback: downgrade() drops the table (destructive, all customers lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Column rationale lives in app/models/customer.py."""
    op.create_table(
        "customers",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Unique identifier assigned on creation",
        ),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Customer full name",
        ),
        sa.Column(
            "date_of_birth",
            sa.Date(),
            nullable=False,
            comment="Calendar date of birth",
        ),
        sa.Column(
            "member_number",
            sa.Integer(),
            nullable=False,
            comment="Loyalty membership number",
        ),
        sa.Column(
            "interests",
            sa.Text(),
            nullable=False,
            comment="Comma-separated list of interests",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this customer was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_customers_created_at", "customers", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_customers_created_at", table_name="customers")
    op.drop_table("customers")
