"""AuthStrategy: an identity resolver paired with a role resolver.

One strategy is built at startup from ``Settings.AUTH_MODE`` and shared by
every request.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session
from supabase import Client, create_client

from mitishirube.auth.identity import Credentials, Identity, LoginResult
from mitishirube.auth.resolvers import (
    IdentityProviderResolver,
    IdentityResolver,
    SessionCookieResolver,
    SignedTokenResolver,
)
from mitishirube.auth.roles import ClaimRoleResolver, ProfileRoleResolver, RoleResolver
from mitishirube.config import Settings
from mitishirube.services.auth_service import require_login_fields

logger = logging.getLogger(__name__)

AUTH_MODES = ("session", "token", "provider")


class AuthStrategy:
    def __init__(self, mode: str, identity_resolver: IdentityResolver, role_resolver: RoleResolver):
        self.mode = mode
        self.identity_resolver = identity_resolver
        self.role_resolver = role_resolver

    @property
    def uses_cookie(self) -> bool:
        return self.mode == "session"

    def authenticate(self, credentials: Credentials, db: Session, required: bool = False) -> Optional[Identity]:
        identity = self.identity_resolver.resolve(credentials, db, required=required)
        if identity is None:
            return None
        return self.role_resolver.assign(identity, db)

    def login(self, username: Optional[str], password: Optional[str], db: Session) -> LoginResult:
        require_login_fields(username, password)
        result = self.identity_resolver.login(username, password, db)
        identity = self.role_resolver.assign(result.identity, db)
        return LoginResult(identity=identity, token=result.token, session_id=result.session_id)

    def logout(self, credentials: Credentials, db: Session) -> None:
        self.identity_resolver.logout(credentials, db)


def build_strategy(settings: Settings, supabase: Optional[Client] = None) -> AuthStrategy:
    mode = settings.AUTH_MODE.lower()
    if mode == "session":
        return AuthStrategy(mode, SessionCookieResolver(settings), ClaimRoleResolver())
    if mode == "token":
        return AuthStrategy(mode, SignedTokenResolver(settings), ClaimRoleResolver())
    if mode == "provider":
        client = supabase or create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        return AuthStrategy(mode, IdentityProviderResolver(client), ProfileRoleResolver(client))
    raise ValueError(f"Unknown AUTH_MODE {settings.AUTH_MODE!r}; expected one of {AUTH_MODES}")
