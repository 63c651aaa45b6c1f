"""
Password hashing and verification.

Uses Argon2id (memory-hard) with a fresh random salt per hash; the salt and
cost parameters are embedded in the encoded output.
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher()


class PasswordHashError(ValueError):
    """The stored hash is not a valid Argon2 encoding (data integrity fault)."""


def hash_password(password: str) -> str:
    """Hash a password with Argon2id."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return whether ``password`` matches ``password_hash``.

    A mismatch returns ``False``. A hash this module could not have produced
    raises ``PasswordHashError``.
    """
    try:
        return _hasher.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError) as exc:
        # wrong prefix, truncated parameters, or undecodable salt/digest
        raise PasswordHashError("stored password hash is malformed") from exc
