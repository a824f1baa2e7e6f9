# agrichain/api/routers/orders.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import CheckoutIn
from agrichain.services.registry import Services

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/checkout/{session_id}", status_code=201)
def checkout(
    session_id: str,
    payload: CheckoutIn,
    services: Services = Depends(get_services),
):
    """
    Tworzy zamowienie z koszyka sesji i czysci koszyk.
    Powiadomienie idzie asynchronicznie.
    """
    try:
        order = services.orders.place_order(
            services.cart(session_id),
            delivery_info=payload.delivery_info,
            payment_info=payload.payment_info,
            tx_hash=payload.tx_hash,
        )
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "data": order, "message": "Order placed successfully"}


@router.get("/")
def list_orders(session_id: Optional[str] = None, services: Services = Depends(get_services)):
    return {"success": True, "data": services.orders.list_orders(session_id)}


@router.get("/{order_id}")
def get_order(order_id: str, services: Services = Depends(get_services)):
    """
    Szczegoly zamowienia do sledzenia dostawy.
    """
    try:
        return {"success": True, "data": services.orders.get_order(order_id)}
    except AgriChainError as e:
        raise to_http(e)
