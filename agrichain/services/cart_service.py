# agrichain/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, List

from agrichain.data.collections import CollectionStore
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

LOAD_CART = "LOAD_CART"
ADD_ITEM = "ADD_ITEM"
REMOVE_ITEM = "REMOVE_ITEM"
UPDATE_QUANTITY = "UPDATE_QUANTITY"
CLEAR_CART = "CLEAR_CART"
APPLY_DISCOUNT = "APPLY_DISCOUNT"

CART_KEY = "agrichain-cart:{session_id}"

#pola produktu kopiowane do pozycji koszyka
_LINE_FIELDS = ("id", "name", "price", "image", "farmer", "farmer_id", "unit", "location")


def empty_cart() -> Dict[str, Any]:
    return {"items": [], "total_items": 0, "discount": 0}


def _json_number(value: Any) -> Any:
    #snapshot idzie do JSON, Decimal zapisujemy jako float i czytamy z powrotem przez Decimal(str(...))
    if isinstance(value, Decimal):
        return float(value)
    return value


def _same(a: Any, b: Any) -> bool:
    return str(a) == str(b)


def _load_state(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
        raise ValueError("Cart snapshot has an invalid shape")

    items = []
    for line in payload["items"]:
        if not isinstance(line, dict) or "id" not in line or "price" not in line:
            raise ValueError("Cart snapshot has an invalid line")
        quantity = int(line.get("quantity") or 0)
        if quantity >= 1:
            items.append({**line, "quantity": quantity})

    return {
        "items": items,
        "total_items": sum(i["quantity"] for i in items),
        "discount": max(0, payload.get("discount") or 0),
    }


def reduce_cart(state: Dict[str, Any], action: str, payload: Any = None) -> Dict[str, Any]:
    """
    Czysta funkcja przejscia koszyka: (stan, akcja) -> nowy stan.
    Nie modyfikuje przekazanego stanu.
    """
    items: List[dict] = state["items"]

    if action == LOAD_CART:
        return _load_state(payload)

    if action == ADD_ITEM:
        quantity = int(payload.get("quantity", 1))
        if quantity <= 0:
            # dodanie 0 lub mniej usuwa pozycje
            return reduce_cart(state, REMOVE_ITEM, payload["id"])

        if any(_same(i["id"], payload["id"]) for i in items):
            new_items = [
                {**i, "quantity": i["quantity"] + quantity} if _same(i["id"], payload["id"]) else i
                for i in items
            ]
        else:
            new_items = [*items, {**payload, "quantity": quantity}]

        return {**state, "items": new_items, "total_items": state["total_items"] + quantity}

    if action == REMOVE_ITEM:
        removed = next((i for i in items if _same(i["id"], payload)), None)
        return {
            **state,
            "items": [i for i in items if not _same(i["id"], payload)],
            "total_items": state["total_items"] - (removed["quantity"] if removed else 0),
        }

    if action == UPDATE_QUANTITY:
        new_quantity = max(0, int(payload["quantity"]))
        new_items = [
            {**i, "quantity": new_quantity} if _same(i["id"], payload["id"]) else i
            for i in items
        ]
        new_items = [i for i in new_items if i["quantity"] > 0]
        return {**state, "items": new_items, "total_items": sum(i["quantity"] for i in new_items)}

    if action == CLEAR_CART:
        return empty_cart()

    if action == APPLY_DISCOUNT:
        return {**state, "discount": max(0, payload)}

    raise ValueError(f"Unknown cart action: {action}")


def cart_subtotal(state: Dict[str, Any]) -> Decimal:
    return sum(
        (Decimal(str(i["price"])) * i["quantity"] for i in state["items"]),
        Decimal("0.00"),
    )


def cart_total(state: Dict[str, Any]) -> Decimal:
    #rabat nigdy nie schodzi ponizej zera
    return max(Decimal("0.00"), cart_subtotal(state) - Decimal(str(state["discount"])))


class CartService:
    """
    Koszyk jednej sesji. Stan w pamieci, po kazdym przejsciu zapisywany
    jako snapshot pod kluczem sesji i wczytywany przy tworzeniu serwisu.
    """

    def __init__(self, store: CollectionStore, session_id: str = "default"):
        self.store = store
        self.session_id = session_id
        self.key = CART_KEY.format(session_id=session_id)
        self.state = self._restore()

    def _restore(self) -> Dict[str, Any]:
        saved = self.store.get_value(self.key)
        if saved is None:
            return empty_cart()
        try:
            return reduce_cart(empty_cart(), LOAD_CART, saved)
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable cart snapshot for session {self.session_id}: {e}")
            return empty_cart()

    def _dispatch(self, action: str, payload: Any = None) -> Dict[str, Any]:
        new_state = reduce_cart(self.state, action, payload)
        # najpierw zapis, stan w pamieci zmieniamy dopiero gdy sie udal
        self.store.put_value(self.key, new_state)
        self.state = new_state
        logger.info(f"Cart {self.session_id}: {action}, {new_state['total_items']} items")
        return self.get_cart()

    # commands
    def add_to_cart(self, product: Dict[str, Any], quantity: int = 1) -> Dict[str, Any]:
        if product.get("id") in (None, "") or product.get("price") is None:
            raise ValueError("Product must have an id and a price")
        line = {k: product[k] for k in _LINE_FIELDS if product.get(k) is not None}
        line["price"] = _json_number(line["price"])
        line["quantity"] = quantity
        return self._dispatch(ADD_ITEM, line)

    def remove_from_cart(self, product_id: Any) -> Dict[str, Any]:
        return self._dispatch(REMOVE_ITEM, product_id)

    def update_quantity(self, product_id: Any, quantity: int) -> Dict[str, Any]:
        return self._dispatch(UPDATE_QUANTITY, {"id": product_id, "quantity": quantity})

    def clear_cart(self) -> Dict[str, Any]:
        return self._dispatch(CLEAR_CART)

    def apply_discount(self, amount: float) -> Dict[str, Any]:
        return self._dispatch(APPLY_DISCOUNT, _json_number(amount))

    def restore(self, state: Dict[str, Any]) -> None:
        """Przywraca wczesniejszy stan, np. gdy checkout nie zapisal zamowienia."""
        self.store.put_value(self.key, state)
        self.state = state
        logger.info(f"Cart {self.session_id}: restored, {state['total_items']} items")

    # query
    def get_cart_subtotal(self) -> Decimal:
        return cart_subtotal(self.state)

    def get_cart_total(self) -> Decimal:
        return cart_total(self.state)

    def get_cart(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "items": list(self.state["items"]),
            "total_items": self.state["total_items"],
            "discount": Decimal(str(self.state["discount"])),
            "subtotal": self.get_cart_subtotal(),
            "total": self.get_cart_total(),
        }
