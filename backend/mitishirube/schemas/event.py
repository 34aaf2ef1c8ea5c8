"""Pydantic schemas for Events."""
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel


class EventIn(BaseModel):
    """Body of create and update. Required fields are checked by the service."""

    id: Optional[str] = None
    name: Optional[str] = None
    subtitle: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None


class EventOut(BaseModel):
    id: str
    name: str
    subtitle: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None

    model_config = {"from_attributes": True}


class EventList(BaseModel):
    events: list[EventOut]
