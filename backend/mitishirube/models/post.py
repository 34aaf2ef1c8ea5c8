"""BoothPost ORM model.

Neither ``event_id`` nor ``booth_id`` is a foreign key. Posts outlive their
event, and a post whose booth no longer resolves is still listed.
"""
from sqlalchemy import Column, Integer, String, Text
from mitishirube.database import Base


class BoothPost(Base):
    __tablename__ = "booth_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(64), nullable=False, index=True)
    booth_id = Column(String(64), nullable=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    posted_at = Column(String(32), nullable=False, index=True)
