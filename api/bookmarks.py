"""
Bookmark CRUD routes. Every operation is scoped to the authenticated user.

Route prefix: /bookmarks
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from auth.dependencies import get_bookmark_store, get_current_user_id, require_identity
from database.bookmarks import BookmarkStore
from utils.schemas import BookmarkOut, CreateBookmarkRequest, EditBookmarkRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookmarks"], dependencies=[Depends(require_identity)])

_ACCESS_DENIED = "Access to resources denied"


@router.post("", response_model=BookmarkOut, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    req: CreateBookmarkRequest,
    user_id: int = Depends(get_current_user_id),
    bookmarks: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkOut:
    bookmark = await bookmarks.create_bookmark(
        user_id, title=req.title, link=req.link, description=req.description,
    )
    logger.info("User %s created bookmark %s", user_id, bookmark.id)
    return BookmarkOut.model_validate(bookmark)


@router.get("", response_model=List[BookmarkOut])
async def get_bookmarks(
    user_id: int = Depends(get_current_user_id),
    bookmarks: BookmarkStore = Depends(get_bookmark_store),
) -> List[BookmarkOut]:
    rows = await bookmarks.list_bookmarks(user_id)
    return [BookmarkOut.model_validate(row) for row in rows]


@router.get("/{bookmark_id}", response_model=BookmarkOut)
async def get_bookmark_by_id(
    bookmark_id: int,
    user_id: int = Depends(get_current_user_id),
    bookmarks: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkOut:
    bookmark = await bookmarks.get_bookmark(user_id, bookmark_id)
    if bookmark is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bookmark not found")
    return BookmarkOut.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkOut)
async def edit_bookmark_by_id(
    bookmark_id: int,
    req: EditBookmarkRequest,
    user_id: int = Depends(get_current_user_id),
    bookmarks: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkOut:
    bookmark = await bookmarks.update_bookmark(
        user_id, bookmark_id, **req.model_dump(exclude_unset=True),
    )
    if bookmark is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=_ACCESS_DENIED)
    return BookmarkOut.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark_by_id(
    bookmark_id: int,
    user_id: int = Depends(get_current_user_id),
    bookmarks: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    deleted = await bookmarks.delete_bookmark(user_id, bookmark_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=_ACCESS_DENIED)
    logger.info("User %s deleted bookmark %s", user_id, bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
