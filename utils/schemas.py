"""
Pydantic schemas for the users and bookmarks API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public view of a user. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EditUserRequest(BaseModel):
    # omitted means unchanged; null is rejected for non-nullable columns
    email: EmailStr = None
    first_name: Optional[str] = Field(None, max_length=128)
    last_name: Optional[str] = Field(None, max_length=128)


# ═══════════════════════════════════════════════════════════════════════════════
# Bookmarks
# ═══════════════════════════════════════════════════════════════════════════════


class CreateBookmarkRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=512)
    description: Optional[str] = None
    link: str = Field(..., min_length=1)


class EditBookmarkRequest(BaseModel):
    title: str = Field(None, min_length=1, max_length=512)
    description: Optional[str] = None
    link: str = Field(None, min_length=1)


class BookmarkOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    link: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
