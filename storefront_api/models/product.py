"""
Storefront API - Product SQLAlchemy Model
===========================================

What:  ORM model for products. The sample database keeps them in the
       `foods` table, so that is the table name mapped here.
Who:   Read-only from this service (GET /products via ListingService).
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_api.database import Base


class Product(Base):
    __tablename__ = "foods"

    item_id: Mapped[str] = mapped_column(String(20), primary_key=True)
    item_name: Mapped[str] = mapped_column(String(60), nullable=False)
    item_unit: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    company_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<Product(item_id='{self.item_id}', item_name='{self.item_name}')>"
