from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.service import AttendanceLedger
from .chat.service import MessageLog
from .core.constants import DEFAULT_ADMIN_PASSWORD
from .core.exceptions import ValidationError
from .database.bootstrap import ensure_seeded
from .database.connection import DatabaseConnection, DBConfig
from .database.memory_store import InMemoryEntityStore
from .database.mysql_store import MySQLEntityStore
from .database.store import EntityStore
from .events.service import EventService
from .photos.service import PhotoService
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: EntityStore

    auth_service: AuthService
    user_service: UserService
    event_service: EventService
    attendance_ledger: AttendanceLedger
    message_log: MessageLog
    photo_service: PhotoService


def build_store(*, backend: str, db_config: Optional[Mapping[str, Any]] = None) -> EntityStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryEntityStore()
    if backend == "mysql":
        if not db_config:
            raise ValidationError("STORE_BACKEND=mysql needs DB_CONFIG")
        return MySQLEntityStore(DatabaseConnection(DBConfig.from_mapping(db_config)))
    raise ValidationError(f"Unknown store backend: {backend!r}")


def build_container(*, store: EntityStore, admin_password: str = DEFAULT_ADMIN_PASSWORD) -> Container:
    """Wire services around one store; seeds the store on first use."""

    if ensure_seeded(store, admin_password=admin_password):
        logger.info("Fresh store initialised (%s)", type(store).__name__)

    ledger = AttendanceLedger(store)
    return Container(
        store=store,
        auth_service=AuthService(store),
        user_service=UserService(store),
        event_service=EventService(store, ledger),
        attendance_ledger=ledger,
        message_log=MessageLog(store),
        photo_service=PhotoService(store),
    )
