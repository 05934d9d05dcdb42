from .common import ListOptions, Pagination
from .product import ProductCreate, ProductUpdate, ProductRead, ProductPage
from .customer import CustomerCreate, CustomerUpdate, CustomerRead, CustomerPage

__all__ = [
    "ListOptions",
    "Pagination",
    "ProductCreate",
    "ProductUpdate",
    "ProductRead",
    "ProductPage",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerRead",
    "CustomerPage",
]
