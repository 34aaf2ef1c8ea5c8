"""Access policy: which role each operation needs, and the allow/deny decision."""
import enum
from dataclasses import dataclass
from typing import Optional

from mitishirube.auth.identity import Identity
from mitishirube.auth.roles import Role
from mitishirube.errors import AuthenticationError, AuthorizationError


class Operation(str, enum.Enum):
    list_events = "list_events"
    create_event = "create_event"
    update_event = "update_event"
    delete_event = "delete_event"
    read_schedule = "read_schedule"
    read_posts = "read_posts"
    create_post = "create_post"
    read_identity = "read_identity"


class DenyReason(str, enum.Enum):
    unauthorized = "unauthorized"  # no or invalid credential
    forbidden = "forbidden"  # valid identity, role too low


MINIMUM_ROLES: dict[Operation, Role] = {
    Operation.list_events: Role.anonymous,
    Operation.create_event: Role.staff,
    Operation.update_event: Role.staff,
    Operation.delete_event: Role.admin,
    Operation.read_schedule: Role.anonymous,
    Operation.read_posts: Role.anonymous,
    Operation.create_post: Role.user,
    Operation.read_identity: Role.anonymous,
}

READ_OPERATIONS = (Operation.read_schedule, Operation.read_posts)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None


class AccessPolicy:
    def __init__(self, public_reads: bool = True):
        self.minimum_roles = dict(MINIMUM_ROLES)
        if not public_reads:
            for op in READ_OPERATIONS:
                self.minimum_roles[op] = Role.user

    def minimum_role(self, operation: Operation) -> Role:
        return self.minimum_roles[operation]

    def decide(self, role: Role, operation: Operation) -> Decision:
        if role >= self.minimum_role(operation):
            return Decision(allowed=True)
        if role == Role.anonymous:
            return Decision(allowed=False, reason=DenyReason.unauthorized)
        return Decision(allowed=False, reason=DenyReason.forbidden)

    def enforce(self, identity: Optional[Identity], operation: Operation) -> None:
        role = identity.role if identity is not None else Role.anonymous
        decision = self.decide(role, operation)
        if decision.allowed:
            return
        if decision.reason == DenyReason.unauthorized:
            raise AuthenticationError()
        if operation in (Operation.create_event, Operation.update_event, Operation.delete_event):
            raise AuthorizationError("admin only" if self.minimum_role(operation) == Role.admin else "staff only")
        raise AuthorizationError()
