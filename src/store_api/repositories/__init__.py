"""
Repository layer.

`GenericRepository` carries all query logic; the domain repositories wrap an
instance of it with their table's configuration.

Usage:
    from store_api.repositories import CustomerRepository, ProductRepository
"""

from .generic_repository import GenericRepository, Page
from .customer_repository import CustomerRepository
from .product_repository import ProductRepository

__all__ = [
    "GenericRepository",
    "Page",
    "CustomerRepository",
    "ProductRepository",
]
