"""Authentication Pydantic schemas for API validation."""

from .auth import (
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenPayload,
    TokenResponse,
    UserResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "UserResponse",
    "TokenResponse",
    "MessageResponse",
    "TokenPayload",
]
