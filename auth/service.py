"""
Signup, signin and request authorization.

``AuthService`` composes the password hasher, the ``TokenIssuer`` and a user
store. Hashing is CPU-bound, so it runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Dict, Optional, Protocol

from auth.errors import CredentialsConflict, CredentialsInvalid, Unauthenticated
from auth.jwt import TokenIssuer
from auth.models import Identity, User
from auth.password import hash_password, verify_password
from database.errors import EmailAlreadyExists

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Argon2 hash verified against when the signin email is unknown."""
    return hash_password("dummy-password-for-unknown-emails")


class UserStoreProtocol(Protocol):
    async def find_user_by_email(self, email: str) -> Optional[User]: ...

    async def create_user(self, email: str, password_hash: str) -> User: ...


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from a ``Bearer <token>`` header value, else ``None``."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class AuthService:
    def __init__(self, users: UserStoreProtocol, issuer: TokenIssuer) -> None:
        self._users = users
        self._issuer = issuer

    async def sign_up(self, email: str, password: str) -> Dict[str, str]:
        password_hash = await asyncio.to_thread(hash_password, password)
        try:
            user = await self._users.create_user(email, password_hash)
        except EmailAlreadyExists as exc:
            logger.info("Signup rejected: email already registered")
            raise CredentialsConflict() from exc

        logger.info("Registered user %s", user.id)
        return self._issuer.issue(user.id, user.email)

    async def sign_in(self, email: str, password: str) -> Dict[str, str]:
        user = await self._users.find_user_by_email(email)
        if user is None:
            # unknown emails pay the same Argon2 cost as a wrong password
            await asyncio.to_thread(verify_password, password, _dummy_hash())
            logger.info("Signin rejected: unknown email")
            raise CredentialsInvalid()

        matches = await asyncio.to_thread(verify_password, password, user.hash)
        if not matches:
            logger.info("Signin rejected: password mismatch for user %s", user.id)
            raise CredentialsInvalid()

        logger.info("Login: user %s", user.id)
        return self._issuer.issue(user.id, user.email)

    def authorize(self, authorization: Optional[str]) -> Identity:
        """Validate a raw ``Authorization`` header value and return its identity."""
        return authorize(self._issuer, authorization)


def authorize(issuer: TokenIssuer, authorization: Optional[str]) -> Identity:
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated()
    return issuer.validate(token)
