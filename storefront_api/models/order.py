"""
Storefront API - Order SQLAlchemy Model
=========================================

What:  ORM model for the `orders` table of the sample database.
Who:   Read-only from this service (GET /orders via ListingService);
       mapped so Alembic and the tests can create the table.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_api.database import Base


class Order(Base):
    __tablename__ = "orders"

    ord_num: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    ord_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    advance_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    ord_date: Mapped[date] = mapped_column(Date, nullable=False)
    cust_code: Mapped[str] = mapped_column(String(20), nullable=False)
    agent_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    ord_description: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)

    def __repr__(self) -> str:
        return f"<Order(ord_num={self.ord_num}, cust_code='{self.cust_code}')>"
