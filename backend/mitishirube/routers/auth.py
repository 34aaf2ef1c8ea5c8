"""Login, logout and current-identity routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from mitishirube.auth.dependencies import get_auth_strategy, get_credentials, get_optional_identity, get_settings
from mitishirube.auth.identity import Credentials, Identity
from mitishirube.auth.strategy import AuthStrategy
from mitishirube.config import Settings
from mitishirube.database import get_db
from mitishirube.schemas.auth import LoginRequest, UserSummary

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    strategy: AuthStrategy = Depends(get_auth_strategy),
    settings: Settings = Depends(get_settings),
):
    """Check credentials; set the session cookie or hand back a bearer token."""
    result = strategy.login(payload.username, payload.password, db)
    identity = result.identity
    body = {
        "ok": True,
        "user": UserSummary(
            username=identity.username,
            boothName=identity.booth_name,
            isAdmin=identity.is_admin,
        ).model_dump(),
    }
    if result.session_id:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            result.session_id,
            max_age=settings.SESSION_TTL_HOURS * 3600,
            httponly=True,
            samesite="lax",
            secure=settings.SESSION_COOKIE_SECURE,
        )
    if result.token:
        body["token"] = result.token
    return body


@router.get("/me")
def me(identity: Optional[Identity] = Depends(get_optional_identity)):
    """Identity summary, or an empty object for anonymous callers."""
    if identity is None:
        return {}
    return identity.summary()


@router.post("/logout")
def logout(
    response: Response,
    credentials: Credentials = Depends(get_credentials),
    db: Session = Depends(get_db),
    strategy: AuthStrategy = Depends(get_auth_strategy),
    settings: Settings = Depends(get_settings),
):
    strategy.logout(credentials, db)
    if strategy.uses_cookie:
        response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"ok": True}
