from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Collection
from ..database.repository import ListCollectionRepository
from .model import Event


class EventRepository(ListCollectionRepository[Event]):
    collection = Collection.EVENTS

    def decode(self, raw: Dict[str, Any]) -> Event:
        return Event.from_dict(raw)

    def encode(self, item: Event) -> Dict[str, Any]:
        return item.to_dict()

    @staticmethod
    def index_of(events: Sequence[Event], event_id: str) -> Optional[int]:
        return next((i for i, e in enumerate(events) if e.event_id == event_id), None)
