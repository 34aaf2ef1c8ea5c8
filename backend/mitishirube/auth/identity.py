"""Credential material and the resolved identity passed through a request."""
from dataclasses import dataclass, field
from typing import Any, Optional

from mitishirube.auth.roles import Role


@dataclass(frozen=True)
class Credentials:
    """Whatever the request carried; either or both may be absent."""

    bearer_token: Optional[str] = None
    session_id: Optional[str] = None


@dataclass(frozen=True)
class Identity:
    subject_id: str
    username: str
    role: Role = Role.user
    booth_id: Optional[str] = None
    booth_name: Optional[str] = None
    event_id: Optional[str] = None
    claims: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_admin(self) -> bool:
        return self.role >= Role.admin

    def summary(self) -> dict[str, Any]:
        """The ``/api/me`` payload."""
        return {
            "username": self.username,
            "boothName": self.booth_name,
            "eventId": self.event_id,
            "isAdmin": self.is_admin,
            "role": self.role.name,
        }


@dataclass(frozen=True)
class LoginResult:
    identity: Identity
    token: Optional[str] = None
    session_id: Optional[str] = None
