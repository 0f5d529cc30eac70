# Models package init
"""
Storefront API - ORM Models
=============================

Importing this package registers every table on `Base.metadata`
(used by `Database.create_all()` and Alembic autogenerate).
"""

from storefront_api.models.customer import Customer
from storefront_api.models.order import Order
from storefront_api.models.product import Product

__all__ = ["Customer", "Order", "Product"]
