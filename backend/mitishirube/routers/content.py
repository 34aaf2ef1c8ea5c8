"""Schedule, timeline and booth post routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mitishirube.auth.dependencies import get_settings, require
from mitishirube.auth.identity import Identity
from mitishirube.auth.policy import Operation
from mitishirube.config import Settings
from mitishirube.database import get_db
from mitishirube.schemas.content import PostCreate, PostCreated, ScheduleEntryOut
from mitishirube.services import post_service, schedule_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/schedule")
def list_schedule(
    event_id: Optional[str] = Query(None, alias="eventId"),
    db: Session = Depends(get_db),
    _: Optional[Identity] = Depends(require(Operation.read_schedule)),
):
    entries = schedule_service.list_schedule(db, event_id)
    return {"items": [ScheduleEntryOut.model_validate(e) for e in entries]}


@router.get("/schedule/{entry_id}")
def get_schedule_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    _: Optional[Identity] = Depends(require(Operation.read_schedule)),
):
    return {"item": ScheduleEntryOut.model_validate(schedule_service.get_schedule_entry(db, entry_id))}


@router.get("/timeline")
def timeline(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _: Optional[Identity] = Depends(require(Operation.read_posts)),
):
    return {"items": post_service.list_timeline(db, limit=settings.TIMELINE_LIMIT)}


@router.get("/posts")
def list_posts(
    event_id: Optional[str] = Query(None, alias="eventId"),
    db: Session = Depends(get_db),
    _: Optional[Identity] = Depends(require(Operation.read_posts)),
):
    return {"items": post_service.list_posts(db, event_id)}


@router.get("/posts/{post_id}")
def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    _: Optional[Identity] = Depends(require(Operation.read_posts)),
):
    return {"item": post_service.get_post(db, post_id)}


@router.post("/posts", response_model=PostCreated)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    identity: Identity = Depends(require(Operation.create_post)),
):
    """Create a post; event and booth come from the caller's identity."""
    post = post_service.create_post(
        db,
        identity,
        payload,
        posted_at_source=settings.POSTED_AT_SOURCE,
        tz_name=settings.POSTED_AT_TIMEZONE,
    )
    return PostCreated(id=post.id)
