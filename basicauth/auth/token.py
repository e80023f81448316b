"""JWT session tokens.

Tokens are stateless: a token is valid exactly when its HS256 signature
matches the server secret and its ``exp`` claim is in the future. There is no
server-side session record and no way to revoke a token before it expires.

Claims:
- sub: user ID
- iat: issued at (Unix timestamp)
- exp: expires at (Unix timestamp)
"""

import logging
from datetime import timedelta

import jwt

from ..exceptions import AuthenticationError, ConfigurationError
from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret_key: str, expiry: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ConfigurationError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.expiry = expiry

    def issue(self, user_id: str) -> str:
        """Create a signed token for ``user_id`` expiring after ``self.expiry``."""
        now_ts = isodatetime.now_unix()
        payload = {
            "sub": user_id,
            "iat": now_ts,
            "exp": now_ts + int(self.expiry.total_seconds()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def decode(self, token: str) -> TokenPayload:
        """
        Validate a token and return its claims.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is malformed, forged,
                signed with another algorithm or missing a required claim
        """
        payload = jwt.decode(
            token,
            self._secret_key,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
        if not isinstance(payload["sub"], str) or not payload["sub"]:
            raise jwt.InvalidTokenError("Subject must be a non-empty string")
        return TokenPayload(**payload)

    def verify(self, token: str) -> str:
        """
        Validate a token and return the user ID it was issued for.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            return self.decode(token).sub
        except jwt.ExpiredSignatureError:
            logger.warning("Session token expired")
            raise AuthenticationError("Unauthorized", {"code": "token_expired"})
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session token: {e}")
            raise AuthenticationError("Unauthorized", {"code": "invalid_token"})
