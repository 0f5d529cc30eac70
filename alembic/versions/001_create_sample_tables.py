"""Create customer, orders and foods tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the three tables the API reads and writes.
       `customer` is keyed by its business code; `foods` holds products.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "customer",
        sa.Column(
            "cust_code",
            sa.String(20),
            nullable=False,
            comment="Business key; immutable after creation",
        ),
        sa.Column(
            "cust_name",
            sa.String(100),
            nullable=False,
            comment="Customer name in title case",
        ),
        sa.Column(
            "cust_city",
            sa.String(100),
            nullable=True,
            comment="City in title case; NULL when absent",
        ),
        sa.PrimaryKeyConstraint("cust_code"),
    )

    op.create_table(
        "orders",
        sa.Column("ord_num", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("ord_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("advance_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("ord_date", sa.Date(), nullable=False),
        sa.Column("cust_code", sa.String(20), nullable=False),
        sa.Column("agent_code", sa.String(20), nullable=True),
        sa.Column("ord_description", sa.String(60), nullable=True),
        sa.PrimaryKeyConstraint("ord_num"),
    )

    op.create_table(
        "foods",
        sa.Column("item_id", sa.String(20), nullable=False),
        sa.Column("item_name", sa.String(60), nullable=False),
        sa.Column("item_unit", sa.String(20), nullable=True),
        sa.Column("company_id", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("item_id"),
    )


def downgrade() -> None:
    """Drop all three tables. All data is lost."""
    op.drop_table("foods")
    op.drop_table("orders")
    op.drop_table("customer")
