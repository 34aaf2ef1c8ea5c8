"""Event service: validated create, full-replace update and non-cascading delete.

Deleting an event leaves its schedule entries and posts stored; they drop
out of event-scoped listings only because nothing lists them by a missing id.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mitishirube.errors import ConflictError, ValidationError
from mitishirube.models.event import Event
from mitishirube.schemas.event import EventIn

logger = logging.getLogger(__name__)

# Replaced together on every update; absent values become NULL.
MUTABLE_FIELDS = ("name", "subtitle", "date", "location")


def list_events(db: Session) -> list[Event]:
    return db.query(Event).order_by(Event.date, Event.id).all()


def create_event(db: Session, payload: EventIn) -> Event:
    if not payload.id or not payload.name:
        raise ValidationError("Id and name are required")

    event = Event(id=payload.id, **{field: getattr(payload, field) for field in MUTABLE_FIELDS})
    db.add(event)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Event create rejected for id %s: %s", payload.id, e.orig)
        raise ConflictError()
    db.refresh(event)
    logger.info("Created event '%s' (%s)", event.name, event.id)
    return event


def update_event(db: Session, event_id: str, payload: EventIn) -> Optional[Event]:
    """Replace every mutable field. An unknown id is a no-op."""
    if not payload.name:
        raise ValidationError("name is required")

    event = db.get(Event, event_id)
    if event is None:
        logger.warning("Update of unknown event %s ignored", event_id)
        return None

    for field in MUTABLE_FIELDS:
        setattr(event, field, getattr(payload, field))
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def delete_event(db: Session, event_id: str) -> bool:
    deleted = db.query(Event).filter(Event.id == event_id).delete()
    db.commit()
    if deleted:
        logger.info("Deleted event %s (schedule and posts kept)", event_id)
    else:
        logger.warning("Delete of unknown event %s ignored", event_id)
    return bool(deleted)
