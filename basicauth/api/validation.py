"""Request validation decorator for Flask endpoints.

@validate_request inspects the decorated view's signature:
- Parameters present in the URL rule (request.view_args) are passed through
  unchanged as strings.
- Any other parameter must be annotated with a Pydantic BaseModel subclass;
  the JSON request body is validated against it and the parsed model is
  passed in its place.

Validation failures raise basicauth.exceptions.ValidationError, which the app
maps to a 400 response.
"""

import inspect
import logging
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

# Body keys whose values are never echoed back in error details
SENSITIVE_KEY_FRAGMENTS = ("password", "answer", "token", "secret")

REDACTED = "***"


def _redact(body: dict) -> dict:
    return {
        key: REDACTED if any(s in str(key).lower() for s in SENSITIVE_KEY_FRAGMENTS) else value
        for key, value in body.items()
    }


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors()
    ]


def validate_request(f):
    """
    Validate the JSON request body against the view's BaseModel parameter.

    Raises:
        TypeError: At decoration time if the view has no parameters or a
            parameter lacks a type annotation; at request time if a body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body is missing, not a JSON object, or
            fails model validation

    Example:
    ```python
    @auth_bp.post("/login")
    @validate_request
    def login(data: LoginRequest):
        ...
    ```
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")

    for param in params:
        if param.annotation is inspect.Parameter.empty:
            raise TypeError(
                f"Parameter '{param.name}' of {f.__name__} lacks a type annotation"
            )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                logger.warning(f"Request body for {f.__name__} is not a JSON object")
                raise ValidationError(
                    "Invalid request body",
                    {"model": model.__name__}
                )

            try:
                kwargs[param.name] = model.model_validate(body)
            except PydanticValidationError as e:
                logger.warning(f"Validation failed for {model.__name__}: {e.error_count()} error(s)")
                raise ValidationError(
                    "Invalid request body",
                    {
                        "model": model.__name__,
                        "received": _redact(body),
                        "errors": _format_errors(e),
                    }
                )

        return f(*args, **kwargs)

    return wrapper
