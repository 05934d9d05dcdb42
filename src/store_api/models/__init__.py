"""
Centralized access to the database models.

Importing this package registers every model on `Base.metadata`:

    from store_api.models import Product, Customer
"""

from .product import Product
from .customer import Customer

__all__ = [
    "Product",
    "Customer",
]
