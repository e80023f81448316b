"""Tests for bcrypt password hashing."""

import bcrypt
import pytest

from basicauth.auth.passwords import PasswordHasher
from basicauth.exceptions import HashingError


class TestPasswordHashing:
    """Tests for PasswordHasher.hash and verify."""

    def test_hash_returns_bcrypt_string(self, hasher):
        """Password hashing should return a 60-character bcrypt hash."""
        hashed = hasher.hash("p1")
        assert isinstance(hashed, str)
        assert len(hashed) == 60
        assert hashed.startswith("$2b$04$")

    def test_same_input_different_hashes(self, hasher):
        """Same password should produce different hashes (due to salt)."""
        hash1 = hasher.hash("SecurePass123")
        hash2 = hasher.hash("SecurePass123")
        assert hash1 != hash2
        assert hasher.verify("SecurePass123", hash1) is True
        assert hasher.verify("SecurePass123", hash2) is True

    def test_verify_wrong_password(self, hasher):
        """Verification should fail for incorrect password."""
        hashed = hasher.hash("SecurePass123")
        assert hasher.verify("WrongPass456", hashed) is False

    def test_verify_empty_string(self, hasher):
        """Verification should fail for empty string."""
        hashed = hasher.hash("SecurePass123")
        assert hasher.verify("", hashed) is False

    def test_verify_is_case_sensitive(self, hasher):
        """Answers and passwords are compared exactly."""
        hashed = hasher.hash("Rex")
        assert hasher.verify("rex", hashed) is False

    def test_verify_unicode(self, hasher):
        """Verification should handle unicode characters."""
        hashed = hasher.hash("SecurePass123\U0001F512")
        assert hasher.verify("SecurePass123\U0001F512", hashed) is True
        assert hasher.verify("SecurePass123", hashed) is False

    def test_verify_malformed_hash_returns_false(self, hasher):
        """A corrupt stored hash never raises."""
        assert hasher.verify("p1", "not-a-bcrypt-hash") is False

    def test_work_factor_is_applied(self):
        """The configured cost appears in the hash prefix."""
        hashed = PasswordHasher(work_factor=5).hash("p1")
        assert hashed.startswith("$2b$05$")

    def test_hash_failure_raises_hashing_error(self, hasher, monkeypatch):
        """A bcrypt failure surfaces as HashingError."""
        def broken_gensalt(rounds):
            raise OSError("entropy source unavailable")

        monkeypatch.setattr(bcrypt, "gensalt", broken_gensalt)

        with pytest.raises(HashingError):
            hasher.hash("p1")
