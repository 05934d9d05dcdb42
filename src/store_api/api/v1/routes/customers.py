from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from store_api.api.dependencies import get_customer_service
from store_api.api.v1.responses import success_response
from store_api.services.customer_service import CustomerService

router = APIRouter(prefix="/clientes", tags=["clientes"])


@router.post("")
async def create_customer(payload: Any = Body(default=None), service: CustomerService = Depends(get_customer_service)):
    customer = await service.create_customer(payload)
    return success_response(customer, "Customer created successfully", status_code=201)


@router.get("")
async def list_customers(request: Request, service: CustomerService = Depends(get_customer_service)):
    page = await service.list_customers(dict(request.query_params))
    return success_response(page, "Customers retrieved successfully")


@router.get("/email/{email}")
async def get_customer_by_email(email: str, service: CustomerService = Depends(get_customer_service)):
    customer = await service.get_customer_by_email(email)
    return success_response(customer, "Customer retrieved successfully")


@router.get("/{customer_id}")
async def get_customer(customer_id: str, service: CustomerService = Depends(get_customer_service)):
    customer = await service.get_customer(customer_id)
    return success_response(customer, "Customer retrieved successfully")


@router.put("/{customer_id}")
async def update_customer(customer_id: str, payload: Any = Body(default=None),
                          service: CustomerService = Depends(get_customer_service)):
    customer = await service.update_customer(customer_id, payload)
    return success_response(customer, "Customer updated successfully")


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str, service: CustomerService = Depends(get_customer_service)):
    await service.delete_customer(customer_id)
    return success_response(None, "Customer deleted successfully")
