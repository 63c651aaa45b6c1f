"""
Auth API routes — signup, signin.

Route prefix: /auth
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from auth.dependencies import get_auth_service
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class AuthRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: AuthRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    """Register a new user and return an access token."""
    return await service.sign_up(req.email, req.password)


@router.post("/signin", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def signin(
    req: AuthRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, str]:
    """Login with email + password."""
    return await service.sign_in(req.email, req.password)
