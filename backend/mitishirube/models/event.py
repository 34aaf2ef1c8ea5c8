"""Event ORM model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from mitishirube.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    date = Column(String(64), nullable=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
