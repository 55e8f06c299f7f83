from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..core.enums import Role


@dataclass(frozen=True)
class ChatMessage:
    message_id: str
    sender_id: str
    sender_name: str
    sender_role: Role
    text: str
    timestamp: int  # ms since epoch

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.message_id,
            "senderId": self.sender_id,
            "senderName": self.sender_name,
            "senderRole": self.sender_role.value,
            "text": self.text,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ChatMessage":
        return cls(
            message_id=str(raw["id"]),
            sender_id=str(raw["senderId"]),
            sender_name=raw["senderName"],
            sender_role=Role(raw["senderRole"]),
            text=raw["text"],
            timestamp=int(raw["timestamp"]),
        )
