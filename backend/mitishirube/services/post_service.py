"""Booth post service.

Reads left-join ``booths`` for the display name, so a post whose booth is
null or gone is still returned with ``booth_name = None``. Writes take the
author's event and booth from the resolved identity; only staff and admins
may direct a post at another event.
"""
import logging
from datetime import datetime
from typing import Optional

import pytz
from sqlalchemy.orm import Session

from mitishirube.auth.identity import Identity
from mitishirube.auth.roles import Role
from mitishirube.errors import AuthenticationError, NotFoundError, ValidationError
from mitishirube.models.booth import Booth
from mitishirube.models.post import BoothPost
from mitishirube.schemas.content import PostCreate, PostOut

logger = logging.getLogger(__name__)

POSTED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def _post_query(db: Session):
    return (
        db.query(BoothPost, Booth.name.label("booth_name"))
        .outerjoin(Booth, Booth.id == BoothPost.booth_id)
    )


def _newest_first(query):
    return query.order_by(BoothPost.posted_at.desc(), BoothPost.id.desc())


def _to_out(row) -> PostOut:
    post, booth_name = row
    return PostOut(
        id=post.id,
        event_id=post.event_id,
        booth_id=post.booth_id,
        title=post.title,
        body=post.body,
        posted_at=post.posted_at,
        booth_name=booth_name,
    )


def list_timeline(db: Session, limit: int = 15) -> list[PostOut]:
    """Latest posts across every event."""
    return [_to_out(row) for row in _newest_first(_post_query(db)).limit(limit).all()]


def list_posts(db: Session, event_id: Optional[str]) -> list[PostOut]:
    """Every post for one event, newest first."""
    if not event_id:
        raise ValidationError("eventId is required")
    query = _post_query(db).filter(BoothPost.event_id == event_id)
    return [_to_out(row) for row in _newest_first(query).all()]


def get_post(db: Session, post_id: int) -> PostOut:
    row = _post_query(db).filter(BoothPost.id == post_id).first()
    if row is None:
        raise NotFoundError("Post not found")
    return _to_out(row)


def resolve_event_id(identity: Identity, requested_event_id: Optional[str]) -> Optional[str]:
    """Staff and admins may name the target event; everyone else posts to their own."""
    if identity.role >= Role.staff and requested_event_id:
        return requested_event_id
    return identity.event_id


def server_posted_at(tz_name: str) -> str:
    return datetime.now(pytz.timezone(tz_name)).strftime(POSTED_AT_FORMAT)


def create_post(
    db: Session,
    identity: Optional[Identity],
    payload: PostCreate,
    posted_at_source: str = "server",
    tz_name: str = "Asia/Tokyo",
) -> BoothPost:
    if identity is None:
        raise AuthenticationError()

    event_id = resolve_event_id(identity, payload.event_id)
    if posted_at_source == "client":
        posted_at = payload.posted_at
    else:
        posted_at = server_posted_at(tz_name)

    if not event_id or not payload.title or not payload.body or not posted_at:
        raise ValidationError("missing fields")

    post = BoothPost(
        event_id=event_id,
        booth_id=identity.booth_id,
        title=payload.title,
        body=payload.body,
        posted_at=posted_at,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post %s created for event %s by %s (booth=%s)", post.id, event_id, identity.username, identity.booth_id)
    return post
