"""Entity store contract.

The store persists five named collections. Every collection is read and written
as a whole; mutations go through ``transaction()`` so the read-modify-write of a
service happens inside one exclusive section.
"""
from __future__ import annotations

import copy
from typing import Any, ContextManager, Dict, Iterable, Protocol, Tuple, Union

from ..core.enums import Collection
from ..core.exceptions import StoreError, ValidationError

CollectionKey = Union[Collection, str]


def as_collection(name: CollectionKey) -> Collection:
    try:
        return Collection(name)
    except ValueError:
        raise ValidationError(f"Unknown collection: {name!r}")


def default_value(collection: Collection) -> Any:
    if collection == Collection.ATTENDANCE:
        return {}
    return []


def lock_order(collections: Iterable[CollectionKey]) -> Tuple[Collection, ...]:
    # Fixed order prevents two transactions from waiting on each other.
    unique = {as_collection(c) for c in collections}
    if not unique:
        raise ValidationError("A transaction needs at least one collection")
    return tuple(sorted(unique, key=lambda c: c.value))


class CollectionReader(Protocol):
    def read(self, collection: CollectionKey) -> Any:
        raise NotImplementedError


class StoreTransaction(CollectionReader, Protocol):
    def has(self, collection: CollectionKey) -> bool:
        raise NotImplementedError

    def write(self, collection: CollectionKey, value: Any) -> None:
        raise NotImplementedError


class EntityStore(CollectionReader, Protocol):
    """Interface of the persistence facade.

    Note (DIP): services depend on this interface, not on a concrete backend.
    """

    def write(self, collection: CollectionKey, value: Any) -> None:
        raise NotImplementedError

    def transaction(self, *collections: CollectionKey) -> ContextManager[StoreTransaction]:
        raise NotImplementedError


class StagedTransaction:
    """Buffered view over the collections locked by one transaction.

    Reads see this transaction's own writes; nothing reaches the backend until
    the owning store calls ``staged()`` after the block exits cleanly.
    """

    def __init__(self, snapshot: Dict[Collection, Any], present: Iterable[Collection]):
        self._snapshot = snapshot
        self._present = set(present)
        self._staged: Dict[Collection, Any] = {}

    def _locked(self, collection: CollectionKey) -> Collection:
        key = as_collection(collection)
        if key not in self._snapshot:
            raise StoreError(f"Collection {key.value!r} is not part of this transaction")
        return key

    def has(self, collection: CollectionKey) -> bool:
        key = self._locked(collection)
        return key in self._staged or key in self._present

    def read(self, collection: CollectionKey) -> Any:
        key = self._locked(collection)
        if key in self._staged:
            return copy.deepcopy(self._staged[key])
        return copy.deepcopy(self._snapshot[key])

    def write(self, collection: CollectionKey, value: Any) -> None:
        key = self._locked(collection)
        self._staged[key] = copy.deepcopy(value)

    def staged(self) -> Dict[Collection, Any]:
        return dict(self._staged)
