"""Password hashing for BasicAuth.

Passwords and security answers are both stored as bcrypt hashes. Each call to
``hash`` draws a fresh salt, so hashing the same input twice gives two
different strings that both verify.
"""

import logging

import bcrypt

from ..exceptions import HashingError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """bcrypt hasher with a configurable work factor."""

    def __init__(self, work_factor: int = 12):
        self.work_factor = work_factor

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext secret with a new random salt.

        Raises:
            HashingError: If bcrypt cannot produce a hash
        """
        try:
            salt = bcrypt.gensalt(rounds=self.work_factor)
            return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, OSError) as e:
            logger.error(f"Password hashing failed: {e.__class__.__name__}")
            raise HashingError("Internal server error") from e

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext secret against a stored hash.

        Uses bcrypt's constant-time comparison. Returns False instead of
        raising for a mismatch or an unparseable hash.
        """
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False
