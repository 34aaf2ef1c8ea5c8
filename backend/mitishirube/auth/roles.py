"""Roles and the resolvers that attach a role to an identity.

Roles are totally ordered: a caller passes every gate a lower role passes.
"""
import enum
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from sqlalchemy.orm import Session

from mitishirube.errors import StorageError
from mitishirube.models.booth import Booth

if TYPE_CHECKING:
    from supabase import Client
    from mitishirube.auth.identity import Identity

logger = logging.getLogger(__name__)


class Role(enum.IntEnum):
    anonymous = 0
    user = 1
    staff = 2
    admin = 3

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Map a stored role label to a Role; unknown or empty labels become ``user``."""
        try:
            role = cls[(value or "").strip().lower()]
        except KeyError:
            return cls.user
        return cls.user if role is cls.anonymous else role


class RoleResolver:
    """Fill in ``role`` (and any booth binding) on a freshly resolved identity."""

    def assign(self, identity: "Identity", db: Session) -> "Identity":
        raise NotImplementedError


class ClaimRoleResolver(RoleResolver):
    """Role carried on the credential itself: ``isAdmin`` or a booth user."""

    def assign(self, identity: "Identity", db: Session) -> "Identity":
        role = Role.admin if identity.claims.get("isAdmin") else Role.user
        return replace(identity, role=role)


class ProfileRoleResolver(RoleResolver):
    """Role read from the provider's ``profiles`` table on every request.

    Nothing is cached between requests so a demotion applies to the very next
    call, even though the provider token itself is still valid.
    """

    def __init__(self, supabase: "Client", table: str = "profiles"):
        self.supabase = supabase
        self.table = table

    def fetch_profile(self, subject_id: str) -> Optional[dict]:
        try:
            result = self.supabase.table(self.table)\
                .select("role, username, booth_id")\
                .eq("id", subject_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.exception("Profile lookup failed for %s", subject_id)
            raise StorageError() from e
        return result.data[0] if result.data else None

    def assign(self, identity: "Identity", db: Session) -> "Identity":
        profile = self.fetch_profile(identity.subject_id)
        if profile is None:
            return replace(identity, role=Role.user, booth_id=None, booth_name=None, event_id=None)

        booth_id = profile.get("booth_id")
        booth = db.get(Booth, booth_id) if booth_id else None
        return replace(
            identity,
            role=Role.parse(profile.get("role")),
            username=profile.get("username") or identity.username,
            booth_id=booth.id if booth else None,
            booth_name=booth.name if booth else None,
            event_id=booth.event_id if booth else None,
        )
