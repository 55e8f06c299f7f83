from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access checks."""

    ADMIN = "admin"
    VOLUNTEER = "volunteer"


class RegistrationStatus(str, Enum):
    """Registration workflow: PENDING -> CONFIRMED, never back."""

    PENDING = "pending"
    CONFIRMED = "confirmed"


class AttendanceMark(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class RegistrationOutcome(str, Enum):
    """Result of a volunteer's request to join an event."""

    ACCEPTED = "accepted"
    ALREADY_REGISTERED = "already_registered"
    EVENT_NOT_FOUND = "event_not_found"


class Collection(str, Enum):
    """Top-level persisted collections (names match the stored keys)."""

    USERS = "users"
    EVENTS = "events"
    EVENT_PHOTOS = "eventPhotos"
    ATTENDANCE = "attendance"
    CHAT_MESSAGES = "chatMessages"
