from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.enums import RegistrationStatus


@dataclass(frozen=True)
class Registration:
    volunteer_id: str
    status: RegistrationStatus = RegistrationStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {"volunteerId": self.volunteer_id, "status": self.status.value}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Registration":
        return cls(volunteer_id=str(raw["volunteerId"]), status=RegistrationStatus(raw["status"]))


@dataclass(frozen=True)
class Event:
    """Domain entity: Event with its registrations stored inline."""

    event_id: str
    name: str
    date: str
    description: str
    registrations: Tuple[Registration, ...] = field(default_factory=tuple)

    def registration_for(self, volunteer_id: str) -> Optional[Registration]:
        return next((r for r in self.registrations if r.volunteer_id == volunteer_id), None)

    def volunteer_ids(self, status: RegistrationStatus) -> Tuple[str, ...]:
        return tuple(r.volunteer_id for r in self.registrations if r.status == status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.event_id,
            "name": self.name,
            "date": self.date,
            "description": self.description,
            "registrations": [r.to_dict() for r in self.registrations],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Event":
        return cls(
            event_id=str(raw["id"]),
            name=raw["name"],
            date=raw.get("date", ""),
            description=raw.get("description", ""),
            registrations=tuple(Registration.from_dict(r) for r in raw.get("registrations") or []),
        )


@dataclass(frozen=True)
class RegistrationCounts:
    confirmed: int
    total: int
