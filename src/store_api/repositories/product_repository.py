"""
Product repository: a configured GenericRepository plus the stock queries.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from store_api.models.product import Product
from store_api.schemas.common import ListOptions
from store_api.schemas.product import ProductPage, ProductRead
from .generic_repository import GenericRepository

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ProductRepository:
    """
    Data access for `produtos`.

    Writable fields: name, price, stock. Free-text search matches name only.
    """

    FIELDS = ("name", "price", "stock")
    SEARCH_FIELDS = ("name",)

    def __init__(self, session: AsyncSession):
        self.session = session
        self.generic = GenericRepository(
            Product,
            session,
            fields=self.FIELDS,
            search_fields=self.SEARCH_FIELDS,
        )

    async def list(self, options: ListOptions | None = None) -> ProductPage:
        page = await self.generic.list(options)
        return ProductPage(
            products=[ProductRead.model_validate(row) for row in page.rows],
            pagination=page.pagination,
        )

    async def find_by_id(self, product_id: int) -> Product | None:
        return await self.generic.find_by_id(product_id)

    async def find_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[Product]:
        """Products with `stock <= threshold`, lowest stock first."""
        products = await self.generic.select_where(
            Product.stock <= threshold,
            order_by=(Product.stock.asc(), Product.id.asc()),
        )
        logger.debug("product.low_stock", extra={"threshold": threshold, "returned": len(products)})
        return products

    async def update_stock(self, product_id: int, quantity: int) -> Product | None:
        """Write only the stock column; None when the product does not exist."""
        return await self.generic.update(product_id, {"stock": quantity})

    async def create(self, data: Mapping[str, Any]) -> Product:
        return await self.generic.create(data)

    async def update(self, product_id: int, data: Mapping[str, Any]) -> Product | None:
        return await self.generic.update(product_id, data)

    async def delete(self, product_id: int) -> bool:
        return await self.generic.delete(product_id)

    async def exists(self, product_id: int) -> bool:
        return await self.generic.exists(product_id)
