"""
JWT access-token issuance and validation.

Tokens are HS256-signed JWTs carrying ``sub`` (user id), ``email``, ``iat``
and ``exp``. The signing secret is passed in at construction time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict

import jwt as pyjwt

from auth.errors import TokenExpired, TokenInvalid
from auth.models import Identity

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY = timedelta(minutes=15)


class TokenIssuer:
    """Mint and validate signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = DEFAULT_EXPIRY,
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, user_id: int, email: str) -> Dict[str, str]:
        """Return ``{"access_token": <jwt>}`` for the given user."""
        now = datetime.now(timezone.utc)
        payload = {
            # PyJWT requires a string subject
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self._expires_in,
        }
        token = pyjwt.encode(payload, self._secret, algorithm=self._algorithm)
        return {"access_token": token}

    def validate(self, token: str) -> Identity:
        """
        Verify signature and expiry and return the token's identity.

        Raises ``TokenExpired`` past expiry and ``TokenInvalid`` for any other
        signature, format or claim problem.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except pyjwt.PyJWTError as exc:
            logger.debug("Rejected token: %s", exc)
            raise TokenInvalid() from exc

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise TokenInvalid() from exc
        email = payload.get("email")
        if not isinstance(email, str):
            raise TokenInvalid()
        return Identity(user_id=user_id, email=email)
