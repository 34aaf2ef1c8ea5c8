"""Server-side login session (cookie session mode only)."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from mitishirube.database import Base


class LoginSession(Base):
    __tablename__ = "sessions"

    token_hash = Column(String(64), primary_key=True)  # sha256 hex of the cookie value
    user_id = Column(Integer, nullable=False, index=True)
    username = Column(String(100), nullable=False)
    booth_id = Column(String(64), nullable=True)
    booth_name = Column(String(255), nullable=True)
    event_id = Column(String(64), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
