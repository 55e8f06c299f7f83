from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Collection
from ..database.repository import ListCollectionRepository
from .model import User


class UserRepository(ListCollectionRepository[User]):
    collection = Collection.USERS

    def decode(self, raw: Dict[str, Any]) -> User:
        return User.from_dict(raw)

    def encode(self, item: User) -> Dict[str, Any]:
        return item.to_dict()

    @staticmethod
    def find(users: Sequence[User], user_id: str) -> Optional[User]:
        return next((u for u in users if u.user_id == user_id), None)
