"""
Store-level exceptions.

Callers match on these types instead of sniffing driver error codes.
"""


class StoreError(Exception):
    """Base exception for persistence failures the stores classify."""


class EmailAlreadyExists(StoreError):
    """A user row with this email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"email already registered: {email}")
        self.email = email
