"""Authentication Pydantic schemas.

Request schemas accept the camelCase keys used by the mobile client
(``securityQuestion``, ``newPassword``) and also the snake_case field names.
Response schemas serialize with camelCase aliases; dump them with
``model_dump(mode="json", by_alias=True)``.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# bcrypt only looks at the first 72 bytes of its input
MAX_SECRET_BYTES = 72

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class CamelModel(BaseModel):
    """Base model mapping snake_case fields to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _check_secret(value: str) -> str:
    if not value:
        raise ValueError("must not be blank")
    if len(value.encode("utf-8")) > MAX_SECRET_BYTES:
        raise ValueError(f"must be at most {MAX_SECRET_BYTES} bytes")
    return value


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("must be a valid email address")
    return value


# ============================================================================
# Request Schemas
# ============================================================================


class RegisterRequest(CamelModel):
    """Schema for POST /register."""

    username: str = Field(..., max_length=64, description="Unique username")
    email: str = Field(..., max_length=254, description="Unique email address")
    password: str = Field(..., description="Plaintext password")
    security_question: str = Field(..., max_length=255, description="Recovery question")
    security_answer: str = Field(..., description="Plaintext recovery answer")

    @field_validator("username", "security_question")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _require_text(v).strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password", "security_answer")
    @classmethod
    def check_secret(cls, v: str) -> str:
        return _check_secret(v)


class LoginRequest(CamelModel):
    """Schema for POST /login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_secret(cls, v: str) -> str:
        return _check_secret(v)


class ForgotPasswordRequest(CamelModel):
    """Schema for POST /forgot-password."""

    email: str
    security_answer: str
    new_password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("security_answer", "new_password")
    @classmethod
    def check_secret(cls, v: str) -> str:
        return _check_secret(v)


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(CamelModel):
    """Public view of a user.

    Deliberately has no hash or security-question fields; listing endpoints
    must build this from storage rows rather than serializing rows directly.
    """

    id: str
    username: str
    email: str
    created_at: datetime


class TokenResponse(BaseModel):
    """Schema for POST /login response."""

    token: str


class MessageResponse(BaseModel):
    """Schema for plain acknowledgement responses."""

    message: str


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., description="Subject user ID")
    iat: int = Field(..., description="Issued at (Unix timestamp)")
    exp: int = Field(..., description="Expires at (Unix timestamp)")
