# agrichain/services/session_service.py
from typing import Any, Dict, Optional

from agrichain.data.collections import CollectionStore

CURRENT_USER_KEY = "agrichain-current-user"


class SessionService:
    def __init__(self, store: CollectionStore):
        self.store = store

    def login(self, user: Dict[str, Any]) -> Dict[str, Any]:
        self.store.put_value(CURRENT_USER_KEY, user)
        return user

    def current_user(self) -> Optional[Dict[str, Any]]:
        user = self.store.get_value(CURRENT_USER_KEY)
        return user if isinstance(user, dict) else None

    def logout(self) -> None:
        self.store.drop_value(CURRENT_USER_KEY)
