"""
Bookmark persistence, always scoped to the owning user.
"""

from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Bookmark

_EDITABLE_FIELDS = ("title", "description", "link")


class BookmarkStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_bookmark(
        self,
        user_id: int,
        title: str,
        link: str,
        description: Optional[str] = None,
    ) -> Bookmark:
        bookmark = Bookmark(user_id=user_id, title=title, link=link, description=description)
        self._session.add(bookmark)
        await self._session.flush()
        return bookmark

    async def list_bookmarks(self, user_id: int) -> List[Bookmark]:
        result = await self._session.execute(
            select(Bookmark)
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.id.asc())
        )
        return list(result.scalars().all())

    async def get_bookmark(self, user_id: int, bookmark_id: int) -> Optional[Bookmark]:
        """Return the bookmark only if ``user_id`` owns it."""
        result = await self._session.execute(
            select(Bookmark).where(
                Bookmark.id == bookmark_id,
                Bookmark.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def update_bookmark(
        self, user_id: int, bookmark_id: int, **fields: Any
    ) -> Optional[Bookmark]:
        bookmark = await self.get_bookmark(user_id, bookmark_id)
        if bookmark is None:
            return None
        for name in _EDITABLE_FIELDS:
            if name in fields:
                setattr(bookmark, name, fields[name])
        await self._session.flush()
        return bookmark

    async def delete_bookmark(self, user_id: int, bookmark_id: int) -> bool:
        bookmark = await self.get_bookmark(user_id, bookmark_id)
        if bookmark is None:
            return False
        await self._session.delete(bookmark)
        await self._session.flush()
        return True
