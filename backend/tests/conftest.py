"""Pytest fixtures: a file-backed SQLite database, recreated for every test."""
import os

SQLITE_URL = "sqlite:///./test.db"
# Must be set before mitishirube.database builds its engine.
os.environ["DATABASE_URL"] = SQLITE_URL

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from supabase import AuthApiError

from mitishirube.auth.passwords import hash_password
from mitishirube.auth.strategy import build_strategy
from mitishirube.config import Settings
from mitishirube.database import Base, get_db
from mitishirube.main import create_app

# Import all models so they register with Base.metadata
from mitishirube.models.event import Event                 # noqa: F401
from mitishirube.models.schedule import ScheduleEntry
from mitishirube.models.booth import Booth, BoothUser
from mitishirube.models.post import BoothPost
from mitishirube.models.session import LoginSession        # noqa: F401


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for seeding and direct assertions."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def make_client(db_engine):
    """Factory for TestClients bound to the test database.

    Keyword arguments become Settings overrides; ``supabase`` injects a fake
    provider client for AUTH_MODE=provider.
    """
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    opened = []

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    def _make(supabase=None, **overrides) -> TestClient:
        settings = Settings(DATABASE_URL=SQLITE_URL, **overrides)
        app = create_app(settings, auth_strategy=build_strategy(settings, supabase=supabase))
        app.dependency_overrides[get_db] = _override_get_db
        c = TestClient(app)
        c.__enter__()
        opened.append(c)
        return c

    yield _make
    for c in opened:
        c.__exit__(None, None, None)


@pytest.fixture(scope="function")
def client(make_client):
    """Cookie-session client with client-supplied posted_at."""
    return make_client(AUTH_MODE="session", POSTED_AT_SOURCE="client")


@pytest.fixture(scope="function")
def token_client(make_client):
    return make_client(AUTH_MODE="token", POSTED_AT_SOURCE="client")


# ---------------------------------------------------------------------------
# Helpers: seed rows directly and log in through the API
# ---------------------------------------------------------------------------
def create_booth(db, booth_id: str = "B1", event_id: str = "E1", name: str = "Booth One") -> Booth:
    booth = Booth(id=booth_id, event_id=event_id, name=name)
    db.add(booth)
    db.commit()
    return booth


def create_user(db, username: str, password: str = "correct", booth_id: str = None, is_admin: bool = False) -> BoothUser:
    user = BoothUser(
        username=username,
        password_hash=hash_password(password, rounds=4),
        booth_id=booth_id,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    return user


def add_schedule_entry(db, event_id: str, title: str, start_time: str, end_time: str = None) -> ScheduleEntry:
    entry = ScheduleEntry(event_id=event_id, title=title, start_time=start_time, end_time=end_time)
    db.add(entry)
    db.commit()
    return entry


def add_post(db, event_id: str, posted_at: str, title: str = "t", booth_id: str = None) -> BoothPost:
    post = BoothPost(event_id=event_id, booth_id=booth_id, title=title, body="b", posted_at=posted_at)
    db.add(post)
    db.commit()
    return post


def login(client: TestClient, username: str, password: str = "correct") -> dict:
    """POST /api/login and return response JSON."""
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def fake_supabase(accounts: dict, profiles: dict) -> MagicMock:
    """MagicMock standing in for a supabase Client.

    ``accounts`` maps access token -> (user id, email, password);
    ``profiles`` maps user id -> profile row and may be mutated mid-test.
    """
    supabase = MagicMock()

    def _user(user_id, email):
        return SimpleNamespace(id=user_id, email=email, app_metadata={})

    def get_user(jwt=None):
        if jwt not in accounts:
            raise AuthApiError("invalid JWT: unable to parse or verify signature", 403, "bad_jwt")
        user_id, email, _ = accounts[jwt]
        return SimpleNamespace(user=_user(user_id, email))

    def sign_in_with_password(credentials):
        for token, (user_id, email, password) in accounts.items():
            if email == credentials["email"] and password == credentials["password"]:
                return SimpleNamespace(user=_user(user_id, email), session=SimpleNamespace(access_token=token))
        raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")

    def profile_query(column, value):
        rows = [profiles[value]] if value in profiles else []
        return SimpleNamespace(limit=lambda n: SimpleNamespace(execute=lambda: SimpleNamespace(data=rows)))

    supabase.auth.get_user.side_effect = get_user
    supabase.auth.sign_in_with_password.side_effect = sign_in_with_password
    supabase.table.return_value.select.return_value.eq.side_effect = profile_query
    return supabase
