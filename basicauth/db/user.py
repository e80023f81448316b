"""User-specific operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Rows are returned as sqlite3.Row and include the hash columns. They must be
projected through the service layer before leaving the process.
"""

import logging
import sqlite3

from ..exceptions import ConflictError, ResourceNotFound
from ..utils import isodatetime, uid

logger = logging.getLogger(__name__)


class UserOperations:
    """User record operations.

    Uniqueness of username and email is enforced by the UNIQUE constraints
    of the users table, so concurrent registrations race safely inside SQLite.
    """

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        security_question: str,
        security_answer_hash: str
    ) -> str:
        """Create a user with an auto-generated UUID.

        Args:
            username: Unique username
            email: Unique email address
            password_hash: bcrypt hash of the password
            security_question: Recovery question text
            security_answer_hash: bcrypt hash of the recovery answer

        Returns:
            The auto-generated user ID (UUID v4 string)

        Raises:
            ConflictError: If the username or email is already registered
        """
        # Generate UUID with collision retry
        max_retries = 3
        for attempt in range(max_retries):
            user_id = uid.generate_uuid()

            try:
                self._conn.execute(
                    """INSERT INTO users
                       (id, username, email, password_hash, security_question,
                        security_answer_hash, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    (
                        user_id,
                        username,
                        email,
                        password_hash,
                        security_question,
                        security_answer_hash,
                        isodatetime.now(),
                    )
                )
                return user_id
            except sqlite3.IntegrityError as e:
                if "users.id" in str(e) and attempt < max_retries - 1:
                    # UUID collision - retry with new UUID
                    continue
                logger.debug(f"User insert rejected: {e}")
                # Same message for username and email collisions
                raise ConflictError("User already exists") from e

        # Should never reach here
        raise RuntimeError("Failed to generate unique UUID after retries")

    def get_by_email(self, email: str) -> sqlite3.Row:
        """Get user by email (case-insensitive).

        Raises:
            ResourceNotFound: If no user has this email
        """
        row = self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email,)
        ).fetchone()

        if not row:
            raise ResourceNotFound("User not found")

        return row

    def get_by_id(self, user_id: str) -> sqlite3.Row:
        """Get user by ID.

        Raises:
            ResourceNotFound: If user_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

        if not row:
            raise ResourceNotFound("User not found", {"user_id": user_id})

        return row

    def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace a user's password hash. Last write wins.

        Raises:
            ResourceNotFound: If user_id doesn't exist
        """
        cursor = self._conn.execute(
            "UPDATE users SET password_hash = ? WHERE id = ?",
            (password_hash, user_id)
        )

        if cursor.rowcount == 0:
            raise ResourceNotFound("User not found", {"user_id": user_id})

    def list(self) -> list[sqlite3.Row]:
        """List all users, oldest first."""
        return self._conn.execute(
            "SELECT * FROM users ORDER BY created_at, rowid"
        ).fetchall()
