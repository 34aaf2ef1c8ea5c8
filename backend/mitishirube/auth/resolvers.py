"""Identity resolvers, one per credential scheme.

Each resolver turns request credentials into an ``Identity`` or ``None``
(anonymous). ``required`` controls what a missing or bad credential means:
anonymous when the route allows it, an error when the route needs a caller.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Optional

import jwt
from sqlalchemy.orm import Session
from supabase import AuthApiError

from mitishirube.auth.identity import Credentials, Identity, LoginResult
from mitishirube.config import Settings
from mitishirube.errors import AuthenticationError, InvalidTokenError, StorageError
from mitishirube.services import auth_service

if TYPE_CHECKING:
    from supabase import Client

logger = logging.getLogger(__name__)


def _absent(required: bool) -> None:
    if required:
        raise AuthenticationError()
    return None


class IdentityResolver:
    def resolve(self, credentials: Credentials, db: Session, required: bool = False) -> Optional[Identity]:
        raise NotImplementedError

    def login(self, username: str, password: str, db: Session) -> LoginResult:
        raise NotImplementedError

    def logout(self, credentials: Credentials, db: Session) -> None:
        """Stateless schemes have nothing to revoke server side."""


class SessionCookieResolver(IdentityResolver):
    """Opaque cookie pointing at a row in the ``sessions`` table."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def login(self, username: str, password: str, db: Session) -> LoginResult:
        identity = auth_service.authenticate(db, username, password)
        session_id = auth_service.create_session(db, identity, self.settings.SESSION_TTL_HOURS)
        return LoginResult(identity=identity, session_id=session_id)

    def resolve(self, credentials: Credentials, db: Session, required: bool = False) -> Optional[Identity]:
        if not credentials.session_id:
            return _absent(required)
        record = auth_service.load_session(db, credentials.session_id)
        if record is None:
            return _absent(required)
        return Identity(
            subject_id=str(record.user_id),
            username=record.username,
            booth_id=record.booth_id,
            booth_name=record.booth_name,
            event_id=record.event_id,
            claims={"isAdmin": bool(record.is_admin)},
        )

    def logout(self, credentials: Credentials, db: Session) -> None:
        if credentials.session_id:
            auth_service.destroy_session(db, credentials.session_id)


class SignedTokenResolver(IdentityResolver):
    """Self-issued HS256 token carrying the login claims."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def issue(self, identity: Identity) -> str:
        payload = {
            "userId": identity.subject_id,
            "username": identity.username,
            "boothId": identity.booth_id,
            "boothName": identity.booth_name,
            "eventId": identity.event_id,
            "isAdmin": identity.is_admin,
            "exp": datetime.now(timezone.utc) + timedelta(hours=self.settings.TOKEN_TTL_HOURS),
        }
        return jwt.encode(payload, self.settings.SECRET_KEY, algorithm=self.settings.JWT_ALGORITHM)

    def login(self, username: str, password: str, db: Session) -> LoginResult:
        identity = auth_service.authenticate(db, username, password)
        return LoginResult(identity=identity, token=self.issue(identity))

    def resolve(self, credentials: Credentials, db: Session, required: bool = False) -> Optional[Identity]:
        if not credentials.bearer_token:
            return _absent(required)
        try:
            claims = jwt.decode(
                credentials.bearer_token,
                self.settings.SECRET_KEY,
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.InvalidTokenError as e:
            logger.info("Rejected token: %s", e)
            if required:
                raise InvalidTokenError()
            return None
        return Identity(
            subject_id=str(claims.get("userId")),
            username=claims.get("username") or "",
            booth_id=claims.get("boothId"),
            booth_name=claims.get("boothName"),
            event_id=claims.get("eventId"),
            claims=claims,
        )


class IdentityProviderResolver(IdentityResolver):
    """Bearer token verified by Supabase Auth; the username is the account email."""

    def __init__(self, supabase: "Client"):
        self.supabase = supabase

    def login(self, username: str, password: str, db: Session) -> LoginResult:
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": username,
                "password": password,
            })
        except AuthApiError as e:
            logger.info("Provider login failed for %r: %s", username, e)
            raise AuthenticationError(auth_service.LOGIN_FAILED)
        except Exception as e:
            logger.exception("Provider login unavailable for %r", username)
            raise StorageError() from e
        if not auth_response.user or not auth_response.session:
            raise AuthenticationError(auth_service.LOGIN_FAILED)

        user = auth_response.user
        identity = Identity(subject_id=user.id, username=user.email or username, claims={"email": user.email})
        return LoginResult(identity=identity, token=auth_response.session.access_token)

    def resolve(self, credentials: Credentials, db: Session, required: bool = False) -> Optional[Identity]:
        if not credentials.bearer_token:
            return _absent(required)
        try:
            user_response = self.supabase.auth.get_user(jwt=credentials.bearer_token)
        except AuthApiError as e:
            logger.info("Provider rejected token: %s", e)
            return _absent(required)
        except Exception as e:
            logger.exception("Provider token check unavailable")
            raise StorageError() from e
        if not user_response or not user_response.user:
            return _absent(required)

        user = user_response.user
        return Identity(
            subject_id=user.id,
            username=user.email or "",
            claims={"email": user.email, "app_metadata": user.app_metadata or {}},
        )
