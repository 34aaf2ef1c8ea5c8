"""Pydantic schemas for login and identity summaries."""
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserSummary(BaseModel):
    username: str
    boothName: Optional[str] = None
    isAdmin: bool = False
