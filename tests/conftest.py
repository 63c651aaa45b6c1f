"""
Shared fixtures: in-memory stores and an app wired to them.
"""

import itertools
import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("JWT_SECRET", "test-secret")

from auth.dependencies import get_bookmark_store, get_user_store
from auth.jwt import TokenIssuer
from config.settings import Settings
from database.errors import EmailAlreadyExists
from database.models import Bookmark, User
from main import create_app

TEST_SECRET = "test-secret"


class InMemoryUserStore:
    def __init__(self):
        self.users = {}
        self._ids = itertools.count(1)

    async def get_user(self, user_id):
        return next((u for u in self.users.values() if u.id == user_id), None)

    async def find_user_by_email(self, email):
        return self.users.get(email)

    async def create_user(self, email, password_hash):
        if email in self.users:
            raise EmailAlreadyExists(email)
        now = datetime.now(timezone.utc)
        user = User(id=next(self._ids), email=email, hash=password_hash, created_at=now, updated_at=now)
        self.users[email] = user
        return user

    async def update_user(self, user_id, **fields):
        user = await self.get_user(user_id)
        if user is None:
            return None
        new_email = fields.get("email")
        if new_email and new_email != user.email:
            if new_email in self.users:
                raise EmailAlreadyExists(new_email)
            del self.users[user.email]
            self.users[new_email] = user
        for name in ("email", "first_name", "last_name"):
            if name in fields:
                setattr(user, name, fields[name])
        return user


class InMemoryBookmarkStore:
    def __init__(self):
        self.bookmarks = {}
        self._ids = itertools.count(1)

    async def create_bookmark(self, user_id, title, link, description=None):
        bookmark = Bookmark(
            id=next(self._ids), user_id=user_id, title=title, link=link, description=description,
        )
        self.bookmarks[bookmark.id] = bookmark
        return bookmark

    async def list_bookmarks(self, user_id):
        return [b for _, b in sorted(self.bookmarks.items()) if b.user_id == user_id]

    async def get_bookmark(self, user_id, bookmark_id):
        bookmark = self.bookmarks.get(bookmark_id)
        if bookmark is None or bookmark.user_id != user_id:
            return None
        return bookmark

    async def update_bookmark(self, user_id, bookmark_id, **fields):
        bookmark = await self.get_bookmark(user_id, bookmark_id)
        if bookmark is None:
            return None
        for name in ("title", "description", "link"):
            if name in fields:
                setattr(bookmark, name, fields[name])
        return bookmark

    async def delete_bookmark(self, user_id, bookmark_id):
        if await self.get_bookmark(user_id, bookmark_id) is None:
            return False
        del self.bookmarks[bookmark_id]
        return True


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        create_tables_on_startup=False,
    )


@pytest.fixture
def issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def bookmark_store():
    return InMemoryBookmarkStore()


@pytest.fixture
def app(settings, user_store, bookmark_store):
    app = create_app(settings)
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_bookmark_store] = lambda: bookmark_store
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
