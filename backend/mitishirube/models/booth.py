"""Booth and BoothUser ORM models."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from mitishirube.database import Base


class Booth(Base):
    __tablename__ = "booths"

    id = Column(String(64), primary_key=True)
    event_id = Column(String(64), nullable=True, index=True)
    name = Column(String(255), nullable=False)


class BoothUser(Base):
    """Self-hosted credential record. A null ``booth_id`` means staff/admin with no booth."""

    __tablename__ = "booth_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    booth_id = Column(String(64), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
