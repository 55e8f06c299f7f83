from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ..core.enums import Collection
from .store import CollectionKey, EntityStore, StagedTransaction, as_collection, default_value, lock_order


class InMemoryEntityStore(EntityStore):
    """Process-local store used for tests and single-session runs."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._lock = threading.RLock()
        self._data: Dict[Collection, Any] = {}
        for name, value in (initial or {}).items():
            self._data[as_collection(name)] = copy.deepcopy(value)

    def read(self, collection: CollectionKey) -> Any:
        key = as_collection(collection)
        with self._lock:
            if key not in self._data:
                return default_value(key)
            return copy.deepcopy(self._data[key])

    def write(self, collection: CollectionKey, value: Any) -> None:
        key = as_collection(collection)
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    @contextmanager
    def transaction(self, *collections: CollectionKey) -> Iterator[StagedTransaction]:
        keys = lock_order(collections)
        with self._lock:
            snapshot = {k: copy.deepcopy(self._data.get(k, default_value(k))) for k in keys}
            tx = StagedTransaction(snapshot, present=[k for k in keys if k in self._data])
            yield tx
            self._data.update(tx.staged())

    def dump(self) -> Dict[str, Any]:
        """Raw copy of every stored collection, keyed by collection name."""
        with self._lock:
            return {k.value: copy.deepcopy(v) for k, v in self._data.items()}
