from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..core.enums import AttendanceMark
from ..users.model import User

# volunteer_id -> mark, scoped to one event
AttendanceRecord = Dict[str, AttendanceMark]


@dataclass(frozen=True)
class SheetRow:
    """Read-model: one confirmed registrant on an event's attendance sheet."""

    volunteer: User
    mark: AttendanceMark
    recorded: bool


@dataclass(frozen=True)
class AttendanceTally:
    present: int
    absent: int

    @property
    def total(self) -> int:
        return self.present + self.absent


@dataclass(frozen=True)
class HistoryEntry:
    """Read-model: a volunteer's attendance for one confirmed event.

    ``mark`` is None while the event has no recorded status for them.
    """

    event_id: str
    event_name: str
    date: str
    mark: Optional[AttendanceMark]
