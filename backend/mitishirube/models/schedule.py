"""ScheduleEntry ORM model.

``event_id`` is indexed but carries no foreign key: deleting an event leaves
its entries in place.
"""
from sqlalchemy import Column, Integer, String
from mitishirube.database import Base


class ScheduleEntry(Base):
    __tablename__ = "schedule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    start_time = Column(String(32), nullable=False)
    end_time = Column(String(32), nullable=True)
