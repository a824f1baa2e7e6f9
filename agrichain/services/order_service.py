# agrichain/services/order_service.py
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from agrichain.data.collections import CollectionStore
from agrichain.domain.errors import NotFoundError, StorageWriteError
from agrichain.repos.base import ledger_hash, random_suffix
from agrichain.services.cart_service import CartService
from agrichain.services.notification_service import NotificationService
from agrichain.utils.settings import ORDER_DELIVERY_DAYS
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

ORDERS_KEY = "agrichain-orders"


class OrderService:
    """
    Checkout: zamowienie powstaje z koszyka sesji, koszyk jest czyszczony,
    powiadomienie idzie przez Celery.
    """

    def __init__(self, store: CollectionStore, notifications: Optional[NotificationService] = None):
        self.store = store
        self.notifications = notifications or NotificationService()

    def _orders(self) -> List[dict]:
        orders = self.store.get_value(ORDERS_KEY, [])
        if not isinstance(orders, list):
            logger.warning(f"{ORDERS_KEY} is not a list, starting a fresh order log")
            return []
        return orders

    def place_order(
        self,
        cart: CartService,
        delivery_info: Optional[Dict[str, Any]] = None,
        payment_info: Optional[Dict[str, Any]] = None,
        tx_hash: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not cart.state["items"]:
            raise ValueError("Cannot place an order with an empty cart")

        orders = self._orders()
        now = datetime.now(timezone.utc)

        order_id = f"ORD-{int(time.time() * 1000)}"
        if any(o.get("id") == order_id for o in orders):
            order_id = f"{order_id}-{random_suffix(4)}"

        total = cart.get_cart_total()
        order = {
            "id": order_id,
            "session_id": cart.session_id,
            "items": list(cart.state["items"]),
            "subtotal": float(cart.get_cart_subtotal()),
            "discount": cart.state["discount"],
            "total": float(total),
            "status": "confirmed",
            "delivery_info": delivery_info or {},
            "payment_info": payment_info or {},
            "tx_hash": tx_hash or ledger_hash(),
            "order_date": now.isoformat(),
            "estimated_delivery": (now + timedelta(days=ORDER_DELIVERY_DAYS)).isoformat(),
        }

        # najpierw koszyk, zamowienie zapisane tylko gdy koszyk juz pusty
        previous = cart.state
        cart.clear_cart()
        orders.append(order)
        try:
            self.store.put_value(ORDERS_KEY, orders)
        except StorageWriteError:
            cart.restore(previous)
            raise

        logger.info(f"Order {order_id} placed from cart {cart.session_id}, total {total}")

        try:
            self.notifications.send_order_notification(cart.session_id, order_id, str(total))
        except Exception as e:
            logger.warning(f"Failed to queue notification for order {order_id}: {e}")

        return order

    def get_order(self, order_id: str) -> Dict[str, Any]:
        for order in self._orders():
            if str(order.get("id")) == str(order_id):
                return order
        raise NotFoundError(f"Order with ID {order_id} not found")

    def list_orders(self, session_id: Optional[str] = None) -> List[Dict[str, Any]]:
        orders = self._orders()
        if session_id is not None:
            orders = [o for o in orders if o.get("session_id") == session_id]
        return orders
