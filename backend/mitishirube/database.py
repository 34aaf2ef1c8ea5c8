"""SQLAlchemy engine, session factory and the request-scoped session dependency."""
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from mitishirube.config import settings


def create_db_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


def create_session_factory(bind) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# Defaults for alembic and scripts; the API uses the pair create_app builds.
engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = create_session_factory(engine)

Base = declarative_base()


def get_db(request: Request):
    """Yield a session from the app's factory, closed when the request finishes."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
