"""Pydantic schemas for schedule entries and booth posts."""
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field


class ScheduleEntryOut(BaseModel):
    id: int
    event_id: str
    title: str
    start_time: str
    end_time: Optional[str] = None

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    posted_at: Optional[str] = None
    event_id: Optional[str] = Field(None, alias="eventId")

    model_config = {"populate_by_name": True}


class PostOut(BaseModel):
    id: int
    event_id: str
    booth_id: Optional[str] = None
    title: str
    body: str
    posted_at: str
    booth_name: Optional[str] = None


class PostCreated(BaseModel):
    ok: bool = True
    id: int
