from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional

from ..common.datetime_utils import now_iso
from ..common.ids import new_id
from ..common.validators import plain_text, require_non_empty
from ..core.constants import PHOTO_ID_PREFIX
from ..core.enums import Collection
from ..database.store import EntityStore
from .model import EventPhoto
from .repository import EventPhotoRepository

logger = logging.getLogger(__name__)


class PhotoService:
    """Gallery metadata. Image bytes live wherever ``image_url`` points."""

    def __init__(self, store: EntityStore, photos: Optional[EventPhotoRepository] = None):
        self._store = store
        self._photos = photos or EventPhotoRepository()

    def add_photo(self, image_url: str, description: str, event_name: str, date: Optional[str] = None) -> EventPhoto:
        photo = EventPhoto(
            photo_id=new_id(PHOTO_ID_PREFIX),
            image_url=require_non_empty(image_url, "Image URL"),
            description=plain_text(description),
            event_name=plain_text(event_name),
            date=date or now_iso(),
        )
        with self._store.transaction(Collection.EVENT_PHOTOS) as tx:
            photos = self._photos.load(tx)
            photos.append(photo)
            self._photos.save(tx, photos)

        logger.info("Photo %s added for %r", photo.photo_id, photo.event_name)
        return photo

    def update_photo(self, photo_id: str, description: str, event_name: str) -> Optional[EventPhoto]:
        with self._store.transaction(Collection.EVENT_PHOTOS) as tx:
            photos = self._photos.load(tx)
            for i, photo in enumerate(photos):
                if photo.photo_id == photo_id:
                    photos[i] = dataclasses.replace(
                        photo, description=plain_text(description), event_name=plain_text(event_name)
                    )
                    self._photos.save(tx, photos)
                    return photos[i]
        return None

    def delete_photo(self, photo_id: str) -> bool:
        with self._store.transaction(Collection.EVENT_PHOTOS) as tx:
            photos = self._photos.load(tx)
            remaining = [p for p in photos if p.photo_id != photo_id]
            if len(remaining) == len(photos):
                return False
            self._photos.save(tx, remaining)

        logger.info("Photo %s deleted", photo_id)
        return True

    def list_photos(self) -> List[EventPhoto]:
        return self._photos.load(self._store)
