from __future__ import annotations

from typing import Any, Dict

from ..core.enums import Collection
from ..database.repository import ListCollectionRepository
from .model import ChatMessage


class ChatMessageRepository(ListCollectionRepository[ChatMessage]):
    collection = Collection.CHAT_MESSAGES

    def decode(self, raw: Dict[str, Any]) -> ChatMessage:
        return ChatMessage.from_dict(raw)

    def encode(self, item: ChatMessage) -> Dict[str, Any]:
        return item.to_dict()
