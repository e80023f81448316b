"""Authentication decorators for protected endpoints.

- @auth_required - Requires a valid session token via Authorization: Bearer <token>
"""

import logging
from functools import wraps

from flask import current_app, g, request

from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)

EXTENSION_KEY = "basicauth"


def get_auth_service():
    """Return the AuthService registered on the current app by create_app()."""
    return current_app.extensions[EXTENSION_KEY]


def _bearer_token() -> str:
    """
    Extract the token from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing or not a Bearer header
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthenticationError("Unauthorized", {"code": "missing_auth"})

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        logger.warning("Malformed Authorization header")
        raise AuthenticationError("Unauthorized", {"code": "invalid_auth_header"})

    return parts[1]


def auth_required(f):
    """
    Decorator to require a valid session token for endpoint access.

    The token is checked before the view runs. On success the user ID is
    stored in flask.g.user_id.

    Raises:
        AuthenticationError: If the token is missing, malformed, forged or expired

    Example:
    ```python
    @auth_bp.get("/users")
    @auth_required
    def list_users():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        g.user_id = get_auth_service().authenticate(token)
        logger.debug(f"Token authentication successful for user {g.user_id}")
        return f(*args, **kwargs)

    return wrapper
