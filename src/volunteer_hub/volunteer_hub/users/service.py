from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, USER_ID_PREFIX
from ..core.enums import Collection, Role
from ..database.store import EntityStore
from .model import SignupProfile, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _fold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def password_matches(user: User, password: str) -> bool:
    try:
        return check_password_hash(user.password_hash, password or "")
    except ValueError:
        # e.g. placeholder hashes or corrupted values
        return False


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, store: EntityStore, users: Optional[UserRepository] = None):
        self._store = store
        self._users = users or UserRepository()

    def login(self, identifier: str, password: str) -> Optional[User]:
        """Return the first user matching identifier and password, else None.

        Admins match on name, volunteers on roll number, both case-insensitively.
        The approval flag is not consulted: an unapproved volunteer still
        authenticates and the caller decides what a pending account may do.
        """

        wanted = _fold((identifier or "").strip())
        for user in self._users.load(self._store):
            if _fold(user.login_identifier()) != wanted:
                continue
            if password_matches(user, password):
                logger.info("User %s logged in", user.user_id)
                return user

        logger.info("Login failed for identifier %r", identifier)
        return None


class UserService:
    """Use case: volunteer signup, approval and lookups."""

    def __init__(self, store: EntityStore, users: Optional[UserRepository] = None):
        self._store = store
        self._users = users or UserRepository()

    def signup(self, profile: SignupProfile) -> Optional[User]:
        name = require_non_empty(profile.name, "Name")
        roll_no = require_non_empty(profile.roll_no, "Roll number")
        require_min_length(profile.password, "Password", MIN_PASSWORD_LENGTH)

        with self._store.transaction(Collection.USERS) as tx:
            users = self._users.load(tx)
            for existing in users:
                if _fold(existing.name) == _fold(name) or (
                    existing.roll_no is not None and _fold(existing.roll_no) == _fold(roll_no)
                ):
                    logger.info("Signup rejected: name or roll number already taken (%s)", roll_no)
                    return None

            user = User(
                user_id=new_id(USER_ID_PREFIX),
                role=Role.VOLUNTEER,
                name=name,
                password_hash=generate_password_hash(profile.password),
                approved=False,
                roll_no=roll_no,
                branch=optional_text(profile.branch),
                year_sec=optional_text(profile.year_sec),
                phone=optional_text(profile.phone),
            )
            users.append(user)
            self._users.save(tx, users)

        logger.info("Volunteer %s signed up, awaiting approval", user.user_id)
        return user

    def approve_user(self, user_id: str) -> bool:
        with self._store.transaction(Collection.USERS) as tx:
            users = self._users.load(tx)
            for i, user in enumerate(users):
                if user.user_id != user_id:
                    continue
                if not user.approved:
                    users[i] = dataclasses.replace(user, approved=True)
                    self._users.save(tx, users)
                    logger.info("User %s approved", user_id)
                return True

        logger.info("Approve failed: user %s not found", user_id)
        return False

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.find(self._users.load(self._store), user_id)

    def list_users(self) -> List[User]:
        return self._users.load(self._store)

    def list_pending_volunteers(self) -> List[User]:
        return [u for u in self.list_users() if u.role == Role.VOLUNTEER and not u.approved]

    def list_volunteers(self, search: str = "") -> List[User]:
        """Approved volunteers, optionally filtered by a name/roll number fragment."""
        term = (search or "").strip().casefold()
        out: List[User] = []
        for u in self.list_users():
            if u.role != Role.VOLUNTEER or not u.approved:
                continue
            if term and term not in u.name.casefold() and term not in (u.roll_no or "").casefold():
                continue
            out.append(u)
        return out
