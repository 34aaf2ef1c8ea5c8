"""Schedule reads. Entries are provisioned out of band; the API never writes them."""
from typing import Optional

from sqlalchemy.orm import Session

from mitishirube.errors import NotFoundError, ValidationError
from mitishirube.models.schedule import ScheduleEntry


def list_schedule(db: Session, event_id: Optional[str]) -> list[ScheduleEntry]:
    """Entries for one event, earliest ``start_time`` first."""
    if not event_id:
        raise ValidationError("eventId is required")
    return (
        db.query(ScheduleEntry)
        .filter(ScheduleEntry.event_id == event_id)
        .order_by(ScheduleEntry.start_time.asc(), ScheduleEntry.id.asc())
        .all()
    )


def get_schedule_entry(db: Session, entry_id: int) -> ScheduleEntry:
    entry = db.get(ScheduleEntry, entry_id)
    if entry is None:
        raise NotFoundError("Schedule entry not found")
    return entry
