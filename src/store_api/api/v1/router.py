from fastapi import APIRouter

from .routes import customers, health, products

api_router = APIRouter()
api_router.include_router(products.router)
api_router.include_router(customers.router)
api_router.include_router(health.router)
