"""
User persistence.

``UserStore`` wraps an ``AsyncSession``; it never commits or rolls back, the
request-scoped session dependency owns the transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.errors import EmailAlreadyExists
from database.models import User

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "23505"
_EDITABLE_FIELDS = ("email", "first_name", "last_name")


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique-constraint violation."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == _UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


class UserStore:
    """CRUD helpers for ``User``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._session.get(User, user_id)

    async def find_user_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create_user(self, email: str, password_hash: str) -> User:
        """Insert a user row.

        Raises ``EmailAlreadyExists`` when the email is taken; any other
        integrity failure propagates unchanged.
        """
        user = User(email=email, hash=password_hash)
        self._session.add(user)
        await self._flush(email)
        return user

    async def update_user(self, user_id: int, **fields: Any) -> Optional[User]:
        """Apply the given profile fields as-is; unknown keys are ignored."""
        user = await self.get_user(user_id)
        if user is None:
            return None
        for name in _EDITABLE_FIELDS:
            if name in fields:
                setattr(user, name, fields[name])
        await self._flush(user.email)
        return user

    async def _flush(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                logger.info("Rejected duplicate email on user write")
                raise EmailAlreadyExists(email) from exc
            raise
