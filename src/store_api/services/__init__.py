from .customer_service import CustomerService
from .product_service import ProductService

__all__ = ["CustomerService", "ProductService"]
