"""
Error Envelope - R&D Competency Platform
competency/routers/errors.py

Shared ErrorResponse schema, validation error handler and helpers that
translate domain exceptions into HTTP errors.
"""

from datetime import datetime, timezone
from typing import NoReturn, Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from competency.core.exceptions import (
    DuplicateEntityException,
    EntityDeletedException,
    EntityNotFoundException,
    EvaluationLockedException,
    InvalidStatusTransitionException,
)


#  Validation Error Messages


FIELD_MESSAGES = {
    "name": {
        "missing": "Employee name is required",
        "string_too_short": "Employee name cannot be empty",
        "string_too_long": "Employee name must not exceed 255 characters",
    },
    "employee_id": {
        "missing": "Employee ID is required",
        "uuid_parsing": "Employee ID must be a valid UUID format",
    },
    "evaluation_year": {
        "missing": "Evaluation year is required",
        "less_than_equal": "Evaluation year must be between 2000 and 2100",
        "greater_than_equal": "Evaluation year must be between 2000 and 2100",
    },
    "target_status": {
        "missing": "Target status is required",
        "enum": "Target status must be one of: draft, submitted, approved, rejected",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "date_from_datetime_parsing": "Field '{field}' must be a valid date (YYYY-MM-DD)",
    "date_parsing": "Field '{field}' must be a valid date (YYYY-MM-DD)",
    "enum": "Field '{field}' has an unsupported value",
    "value_error": "{message}",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str, raw_message: str = "") -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field, message=raw_message.removeprefix("Value error, "))
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    field = ".".join(str(part) for part in loc if part not in ("body", "query", "path"))
    message = get_validation_message(field, error_type, err.get("msg", ""))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


def raise_validation_error(msg: str) -> NoReturn:
    raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", msg)


def raise_domain_error(exc: Exception) -> NoReturn:
    """Translate a repository/workflow exception into an HTTP error."""
    if isinstance(exc, EntityNotFoundException):
        code = f"{_snake(exc.entity_type).upper()}_NOT_FOUND"
        raise_error(status.HTTP_404_NOT_FOUND, code, str(exc))
    if isinstance(exc, EntityDeletedException):
        code = f"{_snake(exc.entity_type).upper()}_DELETED"
        raise_error(status.HTTP_410_GONE, code, str(exc))
    if isinstance(exc, DuplicateEntityException):
        raise_error(status.HTTP_409_CONFLICT, "DUPLICATE_EVALUATION", exc.message)
    if isinstance(exc, InvalidStatusTransitionException):
        raise_error(
            status.HTTP_409_CONFLICT,
            "INVALID_STATUS_TRANSITION",
            str(exc),
            {"current_status": exc.current_status, "target_status": exc.target_status},
        )
    if isinstance(exc, EvaluationLockedException):
        raise_error(status.HTTP_409_CONFLICT, "EVALUATION_LOCKED", str(exc))
    raise exc


def _snake(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i:
            out.append("_")
        out.append(ch)
    return "".join(out)
