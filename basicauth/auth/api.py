"""Authentication API endpoints for BasicAuth.

- POST /register        - Create an account with a security question
- POST /login           - Verify credentials and return a session token
- POST /forgot-password - Reset the password using the security answer
- GET  /users           - List users (requires Authorization: Bearer <token>)

All endpoints return JSON. Errors are raised as BasicAuth exceptions and
rendered by the app's error handlers.
"""

import logging

from flask import Blueprint, jsonify

from ..api.validation import validate_request
from .decorators import auth_required, get_auth_service
from .schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
@validate_request
def register(data: RegisterRequest):
    """
    Create a user account.

    Example request:
    ```json
    {
        "username": "alice",
        "email": "a@x.com",
        "password": "p1",
        "securityQuestion": "First pet?",
        "securityAnswer": "rex"
    }
    ```

    Returns:
        201: Empty body
        400: Validation error
        409: Username or email already exists
    """
    get_auth_service().register(data)
    return "", 201


@auth_bp.post("/login")
@validate_request
def login(data: LoginRequest):
    """
    Authenticate and return a session token.

    Example response:
    ```json
    {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
    ```

    Returns:
        200: TokenResponse
        400: Validation error
        401: Invalid credentials (same response for unknown email and wrong password)
    """
    token = get_auth_service().login(data)
    return jsonify(TokenResponse(token=token).model_dump()), 200


@auth_bp.post("/forgot-password")
@validate_request
def forgot_password(data: ForgotPasswordRequest):
    """
    Reset a password after checking the security answer.

    Example request:
    ```json
    {"email": "a@x.com", "securityAnswer": "rex", "newPassword": "p2"}
    ```

    Returns:
        200: MessageResponse
        400: Validation error
        401: Invalid security answer
        404: User not found
    """
    get_auth_service().forgot_password(data)
    return jsonify(MessageResponse(message="Password reset successfully").model_dump()), 200


@auth_bp.get("/users")
@auth_required
def list_users():
    """
    List all users. Hashes and security questions are never included.

    Example response:
    ```json
    [
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "username": "alice",
            "email": "a@x.com",
            "createdAt": "2025-12-29T10:30:00Z"
        }
    ]
    ```

    Returns:
        200: Array of UserResponse
        401: Missing, invalid or expired token
    """
    users = get_auth_service().list_users()
    return jsonify([user.model_dump(mode="json", by_alias=True) for user in users]), 200
