from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from ..core.enums import Collection
from .connection import DatabaseConnection
from .mysql_base import db_cursor, dump_payload, fetchall, fetchone, load_payload
from .store import CollectionKey, EntityStore, StagedTransaction, as_collection, default_value, lock_order

logger = logging.getLogger(__name__)

_UPSERT = """
    INSERT INTO collections(name, payload, version)
    VALUES(%s, %s, 1) AS new
    ON DUPLICATE KEY UPDATE payload=new.payload, version=collections.version+1
"""

_CREATE_IF_MISSING = """
    INSERT IGNORE INTO collections(name, payload, version)
    VALUES(%s, %s, 1)
"""


class MySQLEntityStore(EntityStore):
    """Collections stored as JSON documents, one row per collection.

    Transactions lock the involved rows with SELECT ... FOR UPDATE so concurrent
    writers are serialized by the database instead of overwriting each other.
    A missing row is first created with INSERT IGNORE, so even the first write
    to a collection has a row to lock: a second process starting at the same
    moment waits on the duplicate key and then reads the committed document.
    The upsert uses the row alias form and needs MySQL 8.0.19 or later.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def read(self, collection: CollectionKey) -> Any:
        key = as_collection(collection)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM collections WHERE name=%s", (key.value,))
            row = fetchone(cur)
            if not row:
                return default_value(key)
            return load_payload(row["payload"])

    def write(self, collection: CollectionKey, value: Any) -> None:
        key = as_collection(collection)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT, (key.value, dump_payload(value)))

    @contextmanager
    def transaction(self, *collections: CollectionKey) -> Iterator[StagedTransaction]:
        keys = lock_order(collections)
        with db_cursor(self._conn_factory) as (_, cur):
            snapshot: dict[Collection, Any] = {}
            present: list[Collection] = []
            for key in keys:
                cur.execute(_CREATE_IF_MISSING, (key.value, dump_payload(default_value(key))))
                created = cur.rowcount == 1
                cur.execute("SELECT payload FROM collections WHERE name=%s FOR UPDATE", (key.value,))
                row = fetchone(cur)
                if row and not created:
                    snapshot[key] = load_payload(row["payload"])
                    present.append(key)
                else:
                    snapshot[key] = default_value(key)

            tx = StagedTransaction(snapshot, present=present)
            yield tx

            for key, value in tx.staged().items():
                cur.execute(_UPSERT, (key.value, dump_payload(value)))
            if tx.staged():
                logger.debug("Committed collections: %s", ", ".join(k.value for k in tx.staged()))

    def list_collections(self) -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM collections ORDER BY name")
            return [r["name"] for r in fetchall(cur)]
