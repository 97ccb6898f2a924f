"""Unit tests for PasswordService."""

import pytest

from gatehouse.domain.error import InternalError
from gatehouse.domain.service import PasswordService


class TestPasswordService:
    """Tests for PasswordService."""

    def test_hash_verifies_against_original(self):
        """A hash verifies against the password it was made from."""
        service = PasswordService()

        password_hash = service.hash("correct horse")

        assert service.verify("correct horse", password_hash) is True

    def test_mismatch_is_false(self):
        """A wrong password is a plain mismatch."""
        service = PasswordService()

        assert service.verify("wrong horse", service.hash("correct horse")) is False

    def test_hashes_are_salted(self):
        """Hashing the same password twice yields different encodings."""
        service = PasswordService()

        assert service.hash("correct horse") != service.hash("correct horse")

    def test_hash_is_not_plaintext(self):
        """The encoded hash never contains the password."""
        password_hash = PasswordService().hash("correct horse")

        assert "correct horse" not in password_hash
        assert password_hash.startswith("$argon2")

    @pytest.mark.parametrize("password_hash", ["not-a-hash", "\u00dfroken"])
    def test_malformed_hash_is_internal_error(self, password_hash):
        """An unreadable stored hash is a data-integrity failure, not a mismatch."""
        with pytest.raises(InternalError):
            PasswordService().verify("correct horse", password_hash)
