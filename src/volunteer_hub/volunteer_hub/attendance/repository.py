from __future__ import annotations

from typing import Dict

from ..core.enums import AttendanceMark, Collection
from ..core.exceptions import StoreError
from ..database.store import CollectionReader, StoreTransaction
from .model import AttendanceRecord


class AttendanceRepository:
    """Maps the ``attendance`` collection (event_id -> record) to enums and back."""

    collection = Collection.ATTENDANCE

    def load(self, source: CollectionReader) -> Dict[str, AttendanceRecord]:
        raw = source.read(self.collection)
        if not isinstance(raw, dict):
            raise StoreError("Collection 'attendance' is not a mapping")
        try:
            return {
                str(event_id): {str(v_id): AttendanceMark(mark) for v_id, mark in (record or {}).items()}
                for event_id, record in raw.items()
            }
        except (AttributeError, ValueError) as e:
            raise StoreError(f"Malformed attendance row: {e}") from e

    def save(self, tx: StoreTransaction, attendance: Dict[str, AttendanceRecord]) -> None:
        tx.write(
            self.collection,
            {event_id: {v_id: mark.value for v_id, mark in record.items()} for event_id, record in attendance.items()},
        )
