"""
FastAPI dependencies for authentication.

``require_identity`` is the authorization gate: protected routers list it in
``dependencies=[...]`` so it runs before the handler, validates the bearer
token and stores the resulting ``Identity`` on ``request.state``. Handlers
then read it through ``current_identity`` / ``get_current_user_id``.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import Unauthenticated
from auth.jwt import TokenIssuer
from auth.models import Identity
from auth.service import AuthService, authorize
from database.bookmarks import BookmarkStore
from database.session import get_db_session
from database.users import UserStore


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


def get_bookmark_store(session: AsyncSession = Depends(db_session)) -> BookmarkStore:
    return BookmarkStore(session)


def get_auth_service(
    users: UserStore = Depends(get_user_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, issuer)


def require_identity(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    identity = authorize(issuer, authorization)
    request.state.identity = identity
    return identity


def current_identity(request: Request) -> Identity:
    """The identity ``require_identity`` attached to this request."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthenticated()
    return identity


def get_current_user_id(identity: Identity = Depends(current_identity)) -> int:
    return identity.user_id
