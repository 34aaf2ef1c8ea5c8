"""Event API routes; validation and storage live in event_service."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mitishirube.auth.dependencies import require
from mitishirube.auth.identity import Identity
from mitishirube.auth.policy import Operation
from mitishirube.database import get_db
from mitishirube.schemas.event import EventIn, EventList, EventOut
from mitishirube.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/events", response_model=EventList)
def list_events(
    db: Session = Depends(get_db),
    _: Optional[Identity] = Depends(require(Operation.list_events)),
):
    return {"events": [EventOut.model_validate(e) for e in event_service.list_events(db)]}


@router.post("/events")
def create_event(
    payload: EventIn,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require(Operation.create_event)),
):
    event_service.create_event(db, payload)
    logger.info("Event %s created by %s", payload.id, identity.username)
    return {"ok": True}


@router.put("/events/{event_id}")
def update_event(
    event_id: str,
    payload: EventIn,
    db: Session = Depends(get_db),
    _: Identity = Depends(require(Operation.update_event)),
):
    """Full replace of name, subtitle, date and location."""
    event_service.update_event(db, event_id, payload)
    return {"ok": True}


@router.delete("/events/{event_id}")
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    _: Identity = Depends(require(Operation.delete_event)),
):
    event_service.delete_event(db, event_id)
    return {"ok": True}
