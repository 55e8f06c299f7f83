from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Union

from ..common.validators import require_non_empty
from ..core.enums import AttendanceMark, Collection, RegistrationStatus
from ..core.exceptions import ValidationError
from ..database.store import EntityStore, StoreTransaction
from ..events.repository import EventRepository
from ..users.repository import UserRepository
from .model import AttendanceRecord, AttendanceTally, HistoryEntry, SheetRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MarkInput = Union[AttendanceMark, str]


def _parse_record(partial_record: Mapping[str, MarkInput]) -> AttendanceRecord:
    parsed: AttendanceRecord = {}
    for volunteer_id, mark in partial_record.items():
        volunteer_id = require_non_empty(volunteer_id, "Volunteer id")
        try:
            parsed[volunteer_id] = AttendanceMark(mark)
        except ValueError:
            raise ValidationError(f"Invalid attendance status {mark!r} for {volunteer_id}")
    return parsed


class AttendanceLedger:
    """Per-event attendance rows: merge on post, explicit or cascaded delete."""

    def __init__(
        self,
        store: EntityStore,
        attendance: Optional[AttendanceRepository] = None,
        events: Optional[EventRepository] = None,
        users: Optional[UserRepository] = None,
    ):
        self._store = store
        self._attendance = attendance or AttendanceRepository()
        self._events = events or EventRepository()
        self._users = users or UserRepository()

    def post_attendance(self, event_id: str, partial_record: Mapping[str, MarkInput]) -> None:
        """Merge marks into the event's row; volunteers not mentioned keep theirs."""
        event_id = require_non_empty(event_id, "Event id")
        marks = _parse_record(partial_record)
        if not marks:
            return

        with self._store.transaction(Collection.ATTENDANCE) as tx:
            attendance = self._attendance.load(tx)
            row = attendance.setdefault(event_id, {})
            row.update(marks)
            self._attendance.save(tx, attendance)

        logger.info("Attendance posted for event %s (%d marks)", event_id, len(marks))

    def delete_attendance(self, event_id: str) -> bool:
        with self._store.transaction(Collection.ATTENDANCE) as tx:
            removed = self.remove_record(tx, event_id)

        if not removed:
            logger.info("No attendance row to delete for event %s", event_id)
        return removed

    def remove_record(self, tx: StoreTransaction, event_id: str) -> bool:
        """Drop an event's row inside an already open transaction.

        Event deletion calls this so both removals commit together.
        """
        attendance = self._attendance.load(tx)
        if event_id not in attendance:
            return False
        del attendance[event_id]
        self._attendance.save(tx, attendance)
        logger.info("Attendance row for event %s removed", event_id)
        return True

    def get_record(self, event_id: str) -> AttendanceRecord:
        return self._attendance.load(self._store).get(event_id, {})

    def tally(self, event_id: str) -> Optional[AttendanceTally]:
        record = self._attendance.load(self._store).get(event_id)
        if not record:
            return None
        present = sum(1 for mark in record.values() if mark == AttendanceMark.PRESENT)
        return AttendanceTally(present=present, absent=len(record) - present)

    def attendance_sheet(self, event_id: str) -> Optional[List[SheetRow]]:
        """Confirmed registrants with their mark; unrecorded ones show as absent.

        Returns None when the event does not exist.
        """
        events = self._events.load(self._store)
        index = self._events.index_of(events, event_id)
        if index is None:
            return None

        confirmed = set(events[index].volunteer_ids(RegistrationStatus.CONFIRMED))
        record = self.get_record(event_id)
        rows: List[SheetRow] = []
        for user in self._users.load(self._store):
            if user.user_id not in confirmed:
                continue
            mark = record.get(user.user_id)
            rows.append(SheetRow(volunteer=user, mark=mark or AttendanceMark.ABSENT, recorded=mark is not None))
        return rows

    def volunteer_history(self, volunteer_id: str) -> List[HistoryEntry]:
        """Events the volunteer is confirmed for, newest date first."""
        attendance = self._attendance.load(self._store)
        out: List[HistoryEntry] = []
        for event in self._events.load(self._store):
            reg = event.registration_for(volunteer_id)
            if not reg or reg.status != RegistrationStatus.CONFIRMED:
                continue
            out.append(
                HistoryEntry(
                    event_id=event.event_id,
                    event_name=event.name,
                    date=event.date,
                    mark=attendance.get(event.event_id, {}).get(volunteer_id),
                )
            )
        # ISO dates (YYYY-MM-DD) sort chronologically as strings
        out.sort(key=lambda h: h.date, reverse=True)
        return out
