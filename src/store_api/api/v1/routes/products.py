from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from store_api.api.dependencies import get_product_service
from store_api.api.v1.responses import success_response
from store_api.services.product_service import ProductService

router = APIRouter(prefix="/produtos", tags=["produtos"])


@router.post("")
async def create_product(payload: Any = Body(default=None), service: ProductService = Depends(get_product_service)):
    product = await service.create_product(payload)
    return success_response(product, "Product created successfully", status_code=201)


@router.get("")
async def list_products(request: Request, service: ProductService = Depends(get_product_service)):
    page = await service.list_products(dict(request.query_params))
    return success_response(page, "Products retrieved successfully")


# Declared before /{product_id} so "estoque-baixo" is not taken for an id
@router.get("/estoque-baixo")
async def low_stock_products(limite: str | None = None, service: ProductService = Depends(get_product_service)):
    products = await service.find_low_stock(limite)
    return success_response(products, "Low stock products retrieved successfully")


@router.get("/{product_id}")
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    product = await service.get_product(product_id)
    return success_response(product, "Product retrieved successfully")


@router.get("/{product_id}/disponibilidade")
async def stock_availability(product_id: str, quantidade: str | None = None,
                             service: ProductService = Depends(get_product_service)):
    available = await service.check_stock_availability(product_id, quantidade)
    return success_response({"available": available}, "Stock availability checked")


@router.put("/{product_id}")
async def update_product(product_id: str, payload: Any = Body(default=None),
                         service: ProductService = Depends(get_product_service)):
    product = await service.update_product(product_id, payload)
    return success_response(product, "Product updated successfully")


@router.patch("/{product_id}/estoque")
async def update_stock(product_id: str, payload: Any = Body(default=None),
                       service: ProductService = Depends(get_product_service)):
    quantity = payload.get("quantidade") if isinstance(payload, dict) else None
    product = await service.update_stock(product_id, quantity)
    return success_response(product, "Stock updated successfully")


@router.delete("/{product_id}")
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    await service.delete_product(product_id)
    return success_response(None, "Product deleted successfully")
