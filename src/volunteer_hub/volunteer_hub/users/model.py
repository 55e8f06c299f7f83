from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User (administrator or volunteer).

    Note: plain data object, no store access here.
    """

    user_id: str
    role: Role
    name: str
    password_hash: str
    approved: bool
    roll_no: Optional[str] = None
    branch: Optional[str] = None
    year_sec: Optional[str] = None
    phone: Optional[str] = None

    def login_identifier(self) -> Optional[str]:
        """Admins log in by name, volunteers by roll number."""
        if self.role == Role.ADMIN:
            return self.name
        return self.roll_no

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.user_id,
            "role": self.role.value,
            "name": self.name,
            "rollNo": self.roll_no,
            "branch": self.branch,
            "yearSec": self.year_sec,
            "phone": self.phone,
            "passwordHash": self.password_hash,
            "approved": self.approved,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "User":
        return cls(
            user_id=str(raw["id"]),
            role=Role(raw["role"]),
            name=raw["name"],
            password_hash=raw["passwordHash"],
            approved=bool(raw.get("approved", False)),
            roll_no=raw.get("rollNo"),
            branch=raw.get("branch"),
            year_sec=raw.get("yearSec"),
            phone=raw.get("phone"),
        )

    def public_view(self) -> Dict[str, Any]:
        """Serializable view without the password hash."""
        data = self.to_dict()
        data.pop("passwordHash")
        return data


@dataclass(frozen=True)
class SignupProfile:
    """What a prospective volunteer submits on the signup form."""

    name: str
    roll_no: str
    password: str
    branch: Optional[str] = None
    year_sec: Optional[str] = None
    phone: Optional[str] = None
