"""
Product use cases.

Besides validation, every write goes through `apply_business_rules`, which
rejects negative price or stock and rounds the price to 2 decimals even if a
caller bypassed the validators.
"""
import logging
from typing import Any, Mapping

from store_api.exceptions.base import NotFoundError, ValidationError
from store_api.repositories.product_repository import ProductRepository
from store_api.schemas.product import ProductPage, ProductRead
from store_api.schemas.types import round_money
from store_api.validators.base_validator import validate_id, validate_list_query
from store_api.validators.product_validator import (
    validate_low_stock_threshold,
    validate_product_create,
    validate_product_update,
    validate_stock_quantity,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("id", "name", "price", "stock", "created_at")


def apply_business_rules(data: Mapping[str, Any]) -> dict[str, Any]:
    processed = dict(data)

    price = processed.get("price")
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative", fields=["price"])

    stock = processed.get("stock")
    if stock is not None and stock < 0:
        raise ValidationError("Stock cannot be negative", fields=["stock"])

    if price is not None:
        processed["price"] = round_money(price)
    return processed


class ProductService:
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def _get_or_404(self, product_id: int):
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product not found", fields=["id"])
        return product

    async def list_products(self, raw_query: Mapping[str, Any] | None = None) -> ProductPage:
        options = validate_list_query(raw_query, sortable=SORTABLE_FIELDS).unwrap()
        return await self.repository.list(options)

    async def get_product(self, raw_id: Any) -> ProductRead:
        product_id = validate_id(raw_id).unwrap()
        return ProductRead.model_validate(await self._get_or_404(product_id))

    async def create_product(self, payload: Any) -> ProductRead:
        data = validate_product_create(payload).unwrap()
        product = await self.repository.create(apply_business_rules(data.model_dump()))
        return ProductRead.model_validate(product)

    async def update_product(self, raw_id: Any, payload: Any) -> ProductRead:
        product_id = validate_id(raw_id).unwrap()
        changes = apply_business_rules(validate_product_update(payload).unwrap().changes())
        await self._get_or_404(product_id)

        product = await self.repository.update(product_id, changes)
        if product is None:
            raise NotFoundError("Product not found", fields=["id"])
        return ProductRead.model_validate(product)

    async def delete_product(self, raw_id: Any) -> bool:
        product_id = validate_id(raw_id).unwrap()
        await self._get_or_404(product_id)
        return await self.repository.delete(product_id)

    async def find_low_stock(self, raw_threshold: Any = None) -> list[ProductRead]:
        threshold = validate_low_stock_threshold(raw_threshold).unwrap()
        products = await self.repository.find_low_stock(threshold)
        return [ProductRead.model_validate(p) for p in products]

    async def update_stock(self, raw_id: Any, raw_quantity: Any) -> ProductRead:
        quantity = validate_stock_quantity(raw_quantity).unwrap()
        product_id = validate_id(raw_id).unwrap()
        await self._get_or_404(product_id)

        product = await self.repository.update_stock(product_id, quantity)
        if product is None:
            raise NotFoundError("Product not found", fields=["id"])
        logger.info("product.stock_updated", extra={"id": product_id, "stock": quantity})
        return ProductRead.model_validate(product)

    async def check_stock_availability(self, raw_id: Any, raw_quantity: Any) -> bool:
        """True when the product exists and holds at least `raw_quantity` units."""
        product_id = validate_id(raw_id).unwrap()
        quantity = validate_stock_quantity(raw_quantity, "quantity").unwrap()

        product = await self.repository.find_by_id(product_id)
        if product is None:
            return False
        return product.stock >= quantity
