from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EventPhoto:
    """Gallery entry. ``event_name`` is a free-text label, not an event id."""

    photo_id: str
    image_url: str
    description: str
    event_name: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.photo_id,
            "imageUrl": self.image_url,
            "description": self.description,
            "eventName": self.event_name,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "EventPhoto":
        return cls(
            photo_id=str(raw["id"]),
            image_url=raw["imageUrl"],
            description=raw.get("description", ""),
            event_name=raw.get("eventName", ""),
            date=raw.get("date", ""),
        )
