"""Password hashing domain service.

Argon2id with a fresh random salt per hash. The encoded hash embeds the
algorithm parameters and salt, so verification needs nothing else.
"""

import logfire
from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from gatehouse.domain.error import InternalError

from .base import Service


class PasswordService(Service):
    """One-way password hashing and verification."""

    def __init__(self, hasher: Argon2Hasher | None = None) -> None:
        """Initialize password service.

        Args:
            hasher: Argon2 hasher (library defaults when omitted)
        """
        self.hasher = hasher or Argon2Hasher()

    def hash(self, plaintext: str) -> str:
        """Hash a password.

        Args:
            plaintext: Password to hash

        Returns:
            Self-describing encoded hash

        Raises:
            InternalError: If hashing itself fails
        """
        try:
            return self.hasher.hash(plaintext)
        except HashingError as e:
            logfire.error("Password hashing failed", error=str(e))
            raise InternalError("Password hashing failed")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Args:
            plaintext: Candidate password
            password_hash: Stored encoded hash

        Returns:
            True on match, False on mismatch

        Raises:
            InternalError: If the stored hash is malformed
        """
        try:
            return self.hasher.verify(password_hash, plaintext)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError, UnicodeEncodeError) as e:
            logfire.error("Stored password hash is unreadable", error=str(e))
            raise InternalError("Stored password hash is malformed")
