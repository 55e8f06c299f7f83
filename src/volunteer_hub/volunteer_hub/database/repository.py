from __future__ import annotations

from typing import Any, Dict, Generic, List, Sequence, TypeVar

from ..core.enums import Collection
from ..core.exceptions import StoreError
from .store import CollectionReader, StoreTransaction

T = TypeVar("T")


class ListCollectionRepository(Generic[T]):
    """Maps a list-shaped collection to domain entities and back.

    Repositories hold no state; the caller passes the store (for plain reads)
    or the open transaction (for read-modify-write).
    """

    collection: Collection

    def decode(self, raw: Dict[str, Any]) -> T:
        raise NotImplementedError

    def encode(self, item: T) -> Dict[str, Any]:
        raise NotImplementedError

    def load(self, source: CollectionReader) -> List[T]:
        raw = source.read(self.collection)
        if not isinstance(raw, list):
            raise StoreError(f"Collection {self.collection.value!r} is not a list")
        try:
            return [self.decode(r) for r in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed record in {self.collection.value!r}: {e}") from e

    def save(self, tx: StoreTransaction, items: Sequence[T]) -> None:
        tx.write(self.collection, [self.encode(i) for i in items])
