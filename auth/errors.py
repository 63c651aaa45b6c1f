"""
Authentication error taxonomy.

Every error carries the HTTP status it maps to at the API boundary and a
message that is safe to show to clients.
"""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    """Base exception for all auth-domain failures."""

    status_code: int = status.HTTP_401_UNAUTHORIZED
    default_message: str = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class CredentialsConflict(AuthError):
    """Signup with an email that is already registered."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Credentials taken"


class CredentialsInvalid(AuthError):
    """Signin with an unknown email or a wrong password.

    Both cases share this type and message so a caller cannot tell which
    half of the credential pair was wrong.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Credentials incorrect"


class Unauthenticated(AuthError):
    """No bearer token, or an Authorization header that is not ``Bearer <token>``."""

    default_message = "Missing or malformed bearer token"


class TokenExpired(AuthError):
    default_message = "Token expired"


class TokenInvalid(AuthError):
    default_message = "Invalid token"
