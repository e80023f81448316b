"""Authentication service.

Orchestrates registration, login, password recovery and token checks on top
of the credential store, the password hasher and the token service. Holds no
state of its own beyond those references, so one instance is shared by all
requests.
"""

import logging
import sqlite3

from ..db import get_core
from ..exceptions import AuthenticationError, DatabaseError, ResourceNotFound
from ..utils import isodatetime
from .passwords import PasswordHasher
from .schemas import ForgotPasswordRequest, LoginRequest, RegisterRequest, UserResponse
from .token import TokenService

logger = logging.getLogger(__name__)


def _row_to_user_response(row: sqlite3.Row) -> UserResponse:
    """Project a users row onto the public UserResponse, dropping hashes."""
    return UserResponse(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        created_at=isodatetime.to_datetime(row["created_at"]),
    )


class AuthService:
    """Registration, login, password recovery and access control."""

    def __init__(
        self,
        database_path: str,
        hasher: PasswordHasher,
        tokens: TokenService,
        hide_recovery_user_existence: bool = False,
    ):
        self._database_path = database_path
        self._hasher = hasher
        self._tokens = tokens
        self._hide_recovery_user_existence = hide_recovery_user_existence
        # Verified against on unknown-email logins so both failure paths cost one bcrypt check
        self._dummy_hash = hasher.hash("dummy-password")

    def register(self, data: RegisterRequest) -> str:
        """
        Create a user account.

        The password and the security answer are hashed independently, each
        with its own salt.

        Returns:
            The new user ID

        Raises:
            ConflictError: If the username or email is already registered
        """
        password_hash = self._hasher.hash(data.password)
        security_answer_hash = self._hasher.hash(data.security_answer)

        with self._core() as core:
            user_id = core.user.create(
                username=data.username,
                email=data.email,
                password_hash=password_hash,
                security_question=data.security_question,
                security_answer_hash=security_answer_hash,
            )

        logger.info(f"User registered: {user_id}")
        return user_id

    def login(self, data: LoginRequest) -> str:
        """
        Verify credentials and issue a session token.

        Unknown email and wrong password fail identically so the response
        does not reveal whether an account exists.

        Raises:
            AuthenticationError: If the credentials are invalid
        """
        try:
            with self._core() as core:
                row = core.user.get_by_email(data.email)
        except ResourceNotFound:
            logger.warning("Failed login attempt: unknown email")
            self._hasher.verify(data.password, self._dummy_hash)
            raise AuthenticationError("Invalid credentials")

        if not self._hasher.verify(data.password, row["password_hash"]):
            logger.warning(f"Failed login attempt for user {row['id']}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"Successful login: {row['id']}")
        return self._tokens.issue(row["id"])

    def forgot_password(self, data: ForgotPasswordRequest) -> None:
        """
        Replace a password after checking the security answer.

        Raises:
            ResourceNotFound: If no user has this email (unless
                hide_recovery_user_existence is set)
            AuthenticationError: If the security answer is wrong
        """
        try:
            with self._core() as core:
                row = core.user.get_by_email(data.email)
        except ResourceNotFound:
            logger.warning("Password reset attempted for unknown email")
            if self._hide_recovery_user_existence:
                self._hasher.verify(data.security_answer, self._dummy_hash)
                raise AuthenticationError("Invalid email or security answer")
            raise

        if not self._hasher.verify(data.security_answer, row["security_answer_hash"]):
            logger.warning(f"Invalid security answer for user {row['id']}")
            if self._hide_recovery_user_existence:
                raise AuthenticationError("Invalid email or security answer")
            raise AuthenticationError("Invalid security answer")

        new_hash = self._hasher.hash(data.new_password)
        with self._core() as core:
            core.user.update_password_hash(row["id"], new_hash)

        logger.info(f"Password reset for user {row['id']}")

    def authenticate(self, token: str) -> str:
        """
        Check a bearer token and return its user ID.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        return self._tokens.verify(token)

    def list_users(self) -> list[UserResponse]:
        """Return every user without hash fields."""
        with self._core() as core:
            rows = core.user.list()
        return [_row_to_user_response(row) for row in rows]

    def _core(self):
        try:
            return get_core(self._database_path)
        except sqlite3.Error as e:
            logger.error(f"Database connection failed: {e}")
            raise DatabaseError("Internal server error") from e
