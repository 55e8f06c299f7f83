from __future__ import annotations

from typing import Any, Dict

from ..core.enums import Collection
from ..database.repository import ListCollectionRepository
from .model import EventPhoto


class EventPhotoRepository(ListCollectionRepository[EventPhoto]):
    collection = Collection.EVENT_PHOTOS

    def decode(self, raw: Dict[str, Any]) -> EventPhoto:
        return EventPhoto.from_dict(raw)

    def encode(self, item: EventPhoto) -> Dict[str, Any]:
        return item.to_dict()
