"""Authentication module for BasicAuth.

This module provides authentication functionality:
- Schema validation for auth operations
- bcrypt password and security-answer hashing
- JWT session token issuing and validation
- The AuthService orchestrating registration, login and recovery
- The @auth_required decorator for protected endpoints

Auth endpoints (top-level routes):
- POST /register - Create an account
- POST /login - Authenticate and return a session token
- POST /forgot-password - Reset password via security answer
- GET /users - List users (bearer token required)
"""

from . import schemas, token

__all__ = ["schemas", "token"]
