"""Self-hosted credential checks and server-side session records."""
import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from mitishirube.auth.identity import Identity
from mitishirube.auth.passwords import burn_password_check, verify_password
from mitishirube.auth.roles import Role
from mitishirube.errors import AuthenticationError, ValidationError
from mitishirube.models.booth import Booth, BoothUser
from mitishirube.models.session import LoginSession

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Invalid username or password"


def require_login_fields(username: Optional[str], password: Optional[str]) -> None:
    if not username or not password:
        raise ValidationError("Username and password are required")


def authenticate(db: Session, username: str, password: str) -> Identity:
    """Check a username/password pair against ``booth_users``.

    Unknown usernames and wrong passwords raise the same error.
    """
    row = (
        db.query(BoothUser, Booth)
        .outerjoin(Booth, Booth.id == BoothUser.booth_id)
        .filter(BoothUser.username == username)
        .first()
    )
    if row is None:
        burn_password_check(password)
        logger.info("Login failed for %r", username)
        raise AuthenticationError(LOGIN_FAILED)

    user, booth = row
    if not verify_password(password, user.password_hash):
        logger.info("Login failed for %r", username)
        raise AuthenticationError(LOGIN_FAILED)

    logger.info("User %s logged in (booth=%s, admin=%s)", user.username, user.booth_id, user.is_admin)
    return Identity(
        subject_id=str(user.id),
        username=user.username,
        role=Role.admin if user.is_admin else Role.user,
        booth_id=user.booth_id,
        booth_name=booth.name if booth else "Admin",
        event_id=booth.event_id if booth else None,
        claims={"isAdmin": bool(user.is_admin)},
    )


def _token_hash(session_id: str) -> str:
    return hashlib.sha256(session_id.encode("utf-8")).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def create_session(db: Session, identity: Identity, ttl_hours: int) -> str:
    """Store a session for ``identity`` and return the raw cookie value."""
    session_id = secrets.token_urlsafe(32)
    db.add(LoginSession(
        token_hash=_token_hash(session_id),
        user_id=int(identity.subject_id),
        username=identity.username,
        booth_id=identity.booth_id,
        booth_name=identity.booth_name,
        event_id=identity.event_id,
        is_admin=identity.is_admin,
        expires_at=datetime.now(timezone.utc) + timedelta(hours=ttl_hours),
    ))
    db.commit()
    return session_id


def load_session(db: Session, session_id: str) -> Optional[LoginSession]:
    """Return the live session for a cookie value; expired rows are deleted."""
    record = db.get(LoginSession, _token_hash(session_id))
    if record is None:
        return None
    if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
        db.delete(record)
        db.commit()
        logger.info("Expired session for user %s removed", record.username)
        return None
    return record


def destroy_session(db: Session, session_id: str) -> None:
    deleted = db.query(LoginSession).filter(LoginSession.token_hash == _token_hash(session_id)).delete()
    db.commit()
    if deleted:
        logger.info("Session destroyed")
