# agrichain/api/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import Envelope, ProductIn, ProductUpdate
from agrichain.services.registry import Services

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=Envelope)
async def list_products(
    category: Optional[str] = None,
    farmer_id: Optional[str] = None,
    status: Optional[str] = None,
    available: Optional[bool] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    services: Services = Depends(get_services),
):
    filters = {
        "category": category,
        "farmer_id": farmer_id,
        "status": status,
        "available": available,
        "search": search,
    }
    try:
        return await services.products.list(filters, page=page, limit=limit)
    except AgriChainError as e:
        raise to_http(e)


@router.get("/{product_id}", response_model=Envelope)
async def get_product(product_id: str, services: Services = Depends(get_services)):
    try:
        return await services.products.get_by_id(product_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/", response_model=Envelope, status_code=201)
async def create_product(payload: ProductIn, services: Services = Depends(get_services)):
    try:
        return await services.products.create(payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{product_id}", response_model=Envelope)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    services: Services = Depends(get_services),
):
    try:
        return await services.products.update(product_id, payload.model_dump(exclude_unset=True))
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{product_id}", response_model=Envelope)
async def delete_product(product_id: str, services: Services = Depends(get_services)):
    try:
        return await services.products.delete(product_id)
    except AgriChainError as e:
        raise to_http(e)
