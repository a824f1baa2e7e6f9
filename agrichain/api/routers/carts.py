#agrichain/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import (
    CartItemIn,
    CartOut,
    DiscountIn,
    QuantityIn,
)
from agrichain.services.registry import Services

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, services: Services = Depends(get_services)):
    return services.cart(session_id).get_cart()


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: CartItemIn,
    services: Services = Depends(get_services),
):
    cart = services.cart(session_id)
    product = payload.model_dump(exclude={"quantity"}, exclude_none=True)
    try:
        return cart.add_to_cart(product, payload.quantity)
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{session_id}/items/{product_id}", response_model=CartOut)
def update_quantity(
    session_id: str,
    product_id: str,
    payload: QuantityIn,
    services: Services = Depends(get_services),
):
    try:
        return services.cart(session_id).update_quantity(product_id, payload.quantity)
    except AgriChainError as e:
        raise to_http(e)


@router.delete("/{session_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    product_id: str,
    services: Services = Depends(get_services),
):
    try:
        return services.cart(session_id).remove_from_cart(product_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/{session_id}/discount", response_model=CartOut)
def apply_discount(
    session_id: str,
    payload: DiscountIn,
    services: Services = Depends(get_services),
):
    try:
        return services.cart(session_id).apply_discount(payload.amount)
    except AgriChainError as e:
        raise to_http(e)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, services: Services = Depends(get_services)):
    try:
        return services.cart(session_id).clear_cart()
    except AgriChainError as e:
        raise to_http(e)
