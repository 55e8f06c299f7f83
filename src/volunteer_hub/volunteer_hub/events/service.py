from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional

from ..attendance.service import AttendanceLedger
from ..common.ids import new_id
from ..common.validators import plain_text, require_non_empty
from ..core.constants import EVENT_ID_PREFIX
from ..core.enums import Collection, RegistrationOutcome, RegistrationStatus
from ..database.store import EntityStore
from ..users.model import User
from ..users.repository import UserRepository
from .model import Event, Registration, RegistrationCounts
from .repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Use case: event CRUD, volunteer registration and admin confirmation."""

    def __init__(
        self,
        store: EntityStore,
        ledger: AttendanceLedger,
        events: Optional[EventRepository] = None,
        users: Optional[UserRepository] = None,
    ):
        self._store = store
        self._ledger = ledger
        self._events = events or EventRepository()
        self._users = users or UserRepository()

    def create_event(self, name: str, date: str, description: str) -> Event:
        event = Event(
            event_id=new_id(EVENT_ID_PREFIX),
            name=require_non_empty(name, "Event name"),
            date=require_non_empty(date, "Event date"),
            description=plain_text(description),
        )
        with self._store.transaction(Collection.EVENTS) as tx:
            events = self._events.load(tx)
            events.append(event)
            self._events.save(tx, events)

        logger.info("Event %s created (%s, %s)", event.event_id, event.name, event.date)
        return event

    def update_event(self, event_id: str, name: str, date: str, description: str) -> Optional[Event]:
        name = require_non_empty(name, "Event name")
        date = require_non_empty(date, "Event date")
        with self._store.transaction(Collection.EVENTS) as tx:
            events = self._events.load(tx)
            index = self._events.index_of(events, event_id)
            if index is None:
                logger.info("Update failed: event %s not found", event_id)
                return None
            updated = dataclasses.replace(events[index], name=name, date=date, description=plain_text(description))
            events[index] = updated
            self._events.save(tx, events)

        logger.info("Event %s updated", event_id)
        return updated

    def delete_event(self, event_id: str) -> bool:
        """Remove the event and, in the same transaction, its attendance row."""
        with self._store.transaction(Collection.EVENTS, Collection.ATTENDANCE) as tx:
            events = self._events.load(tx)
            remaining = [e for e in events if e.event_id != event_id]
            if len(remaining) == len(events):
                logger.info("Delete failed: event %s not found", event_id)
                return False
            self._events.save(tx, remaining)
            self._ledger.remove_record(tx, event_id)

        logger.info("Event %s deleted", event_id)
        return True

    def register_for_event(self, event_id: str, volunteer_id: str) -> RegistrationOutcome:
        volunteer_id = require_non_empty(volunteer_id, "Volunteer id")
        with self._store.transaction(Collection.EVENTS) as tx:
            events = self._events.load(tx)
            index = self._events.index_of(events, event_id)
            if index is None:
                return RegistrationOutcome.EVENT_NOT_FOUND

            event = events[index]
            if event.registration_for(volunteer_id):
                logger.info("Volunteer %s already registered for %s", volunteer_id, event_id)
                return RegistrationOutcome.ALREADY_REGISTERED

            events[index] = dataclasses.replace(
                event, registrations=event.registrations + (Registration(volunteer_id=volunteer_id),)
            )
            self._events.save(tx, events)

        logger.info("Volunteer %s registered for event %s (pending)", volunteer_id, event_id)
        return RegistrationOutcome.ACCEPTED

    def confirm_registration(self, event_id: str, volunteer_id: str) -> bool:
        with self._store.transaction(Collection.EVENTS) as tx:
            events = self._events.load(tx)
            index = self._events.index_of(events, event_id)
            if index is None:
                return False

            event = events[index]
            reg = event.registration_for(volunteer_id)
            if reg is None:
                logger.info("Confirm failed: %s has no registration on %s", volunteer_id, event_id)
                return False
            if reg.status == RegistrationStatus.CONFIRMED:
                return True

            regs = tuple(
                dataclasses.replace(r, status=RegistrationStatus.CONFIRMED) if r.volunteer_id == volunteer_id else r
                for r in event.registrations
            )
            events[index] = dataclasses.replace(event, registrations=regs)
            self._events.save(tx, events)

        logger.info("Registration of %s on event %s confirmed", volunteer_id, event_id)
        return True

    def get_event(self, event_id: str) -> Optional[Event]:
        events = self._events.load(self._store)
        index = self._events.index_of(events, event_id)
        return events[index] if index is not None else None

    def list_events(self) -> List[Event]:
        return self._events.load(self._store)

    def events_for_volunteer(self, volunteer_id: str) -> List[Event]:
        return [e for e in self.list_events() if e.registration_for(volunteer_id)]

    def registrants(self, event_id: str, status: RegistrationStatus) -> Optional[List[User]]:
        """Users holding a registration with the given status, in registration order.

        Ids with no matching user are skipped. None when the event does not exist.
        """
        event = self.get_event(event_id)
        if event is None:
            return None
        users = self._users.load(self._store)
        out: List[User] = []
        for volunteer_id in event.volunteer_ids(status):
            user = self._users.find(users, volunteer_id)
            if user:
                out.append(user)
        return out

    @staticmethod
    def registration_counts(event: Event) -> RegistrationCounts:
        return RegistrationCounts(
            confirmed=len(event.volunteer_ids(RegistrationStatus.CONFIRMED)),
            total=len(event.registrations),
        )
