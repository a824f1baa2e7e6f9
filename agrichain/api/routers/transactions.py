# agrichain/api/routers/transactions.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import Envelope, TransactionIn, TransactionUpdate
from agrichain.services.registry import Services

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("/", response_model=Envelope)
async def list_transactions(
    farmer_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
    product_id: Optional[str] = None,
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    services: Services = Depends(get_services),
):
    filters = {
        "farmer_id": farmer_id,
        "buyer_id": buyer_id,
        "product_id": product_id,
        "status": status,
    }
    try:
        return await services.transactions.list(filters, page=page, limit=limit)
    except AgriChainError as e:
        raise to_http(e)


@router.get("/{transaction_id}", response_model=Envelope)
async def get_transaction(transaction_id: str, services: Services = Depends(get_services)):
    try:
        return await services.transactions.get_by_id(transaction_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/", response_model=Envelope, status_code=201)
async def create_transaction(payload: TransactionIn, services: Services = Depends(get_services)):
    try:
        return await services.transactions.create(payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)


@router.patch("/{transaction_id}", response_model=Envelope)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    services: Services = Depends(get_services),
):
    try:
        return await services.transactions.update(transaction_id, payload.model_dump(exclude_unset=True))
    except AgriChainError as e:
        raise to_http(e)


@router.delete("/{transaction_id}", response_model=Envelope)
async def delete_transaction(transaction_id: str, services: Services = Depends(get_services)):
    try:
        return await services.transactions.delete(transaction_id)
    except AgriChainError as e:
        raise to_http(e)
