"""FastAPI dependencies gluing credentials, identity and the access policy."""
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mitishirube.auth.identity import Credentials, Identity
from mitishirube.auth.policy import AccessPolicy, Operation
from mitishirube.auth.roles import Role
from mitishirube.auth.strategy import AuthStrategy
from mitishirube.config import Settings
from mitishirube.database import get_db

# auto_error=False: a missing header is anonymous, not an automatic 403
bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_strategy(request: Request) -> AuthStrategy:
    return request.app.state.auth_strategy


def get_access_policy(request: Request) -> AccessPolicy:
    return request.app.state.access_policy


def get_credentials(
    request: Request,
    bearer_credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer),
    settings: Settings = Depends(get_settings),
) -> Credentials:
    return Credentials(
        bearer_token=bearer_credentials.credentials if bearer_credentials else None,
        session_id=request.cookies.get(settings.SESSION_COOKIE_NAME),
    )


def get_optional_identity(
    credentials: Credentials = Depends(get_credentials),
    strategy: AuthStrategy = Depends(get_auth_strategy),
    db: Session = Depends(get_db),
) -> Optional[Identity]:
    return strategy.authenticate(credentials, db, required=False)


def require(operation: Operation):
    """Dependency factory: resolve the caller and gate it on ``operation``."""
    def check(
        credentials: Credentials = Depends(get_credentials),
        strategy: AuthStrategy = Depends(get_auth_strategy),
        policy: AccessPolicy = Depends(get_access_policy),
        db: Session = Depends(get_db),
    ) -> Optional[Identity]:
        required = policy.minimum_role(operation) > Role.anonymous
        identity = strategy.authenticate(credentials, db, required=required)
        policy.enforce(identity, operation)
        return identity
    return check
