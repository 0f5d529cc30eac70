"""
Storefront API - Customer SQLAlchemy Model
============================================

What:  ORM model for the `customer` table.
Who:   Used by CustomerService (insert/update/delete), ListingService and
       Alembic.

Table Design:
    - cust_code: natural business key and primary key. Every mutation
      addresses a row by this value; it never changes after insert.
    - cust_name: stored in title case (normalized by the validation layer)
    - cust_city: title case when present; NULL when absent or cleared
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_api.database import Base


class Customer(Base):
    """A customer row, addressed by its business key `cust_code`."""

    __tablename__ = "customer"

    cust_code: Mapped[str] = mapped_column(
        String(20),
        primary_key=True,
        comment="Business key; immutable after creation",
    )

    cust_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Customer name in title case",
    )

    cust_city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        default=None,
        comment="City in title case; NULL when absent",
    )

    def __repr__(self) -> str:
        return f"<Customer(cust_code='{self.cust_code}', cust_name='{self.cust_name}')>"
