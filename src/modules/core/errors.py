"""Standardized API error bodies.

Every error leaving the API has the same shape::

    {
        "errorCode": "PRODUCT_NOT_FOUND",
        "message": "Product not found with id: 42",
        "status": 404,
        "timestamp": "2024-01-01T12:00:00+00:00",
    }

Validation failures add ``validationErrors``, a list of
``{"field": ..., "message": ...}`` objects.

Views build domain error responses with ``error_response``;
``api_exception_handler`` (wired as DRF's ``EXCEPTION_HANDLER``) reshapes
framework errors such as malformed JSON or unsupported methods.
Anything DRF does not handle is left alone and surfaces as a 500.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

VALIDATION_FAILED = "VALIDATION_FAILED"


def error_body(
    error_code: str,
    message: str,
    status_code: int,
    validation_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "errorCode": error_code,
        "message": message,
        "status": status_code,
        "timestamp": timezone.now().isoformat(),
    }
    if validation_errors is not None:
        body["validationErrors"] = validation_errors
    return body


def error_response(
    error_code: str,
    message: str,
    status_code: int,
    validation_errors: Optional[List[Dict[str, str]]] = None,
) -> Response:
    return Response(
        error_body(error_code, message, status_code, validation_errors),
        status=status_code,
    )


def validation_error_response(
    exc: PydanticValidationError,
    field_names: Optional[Dict[str, str]] = None,
    error_code: str = VALIDATION_FAILED,
) -> Response:
    """400 response listing every pydantic error.

    ``field_names`` maps DTO attribute names back to their wire names
    (e.g. ``image_url`` -> ``imageUrl``).
    """
    field_names = field_names or {}
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(
            {"field": field_names.get(loc, loc), "message": error["msg"]}
        )
    logger.info("request.validation_failed", errors=len(errors))
    return error_response(
        error_code,
        "Validation failed",
        status.HTTP_400_BAD_REQUEST,
        validation_errors=errors,
    )


def _flatten(detail: Any, prefix: str = "") -> List[Dict[str, str]]:
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            errors.extend(_flatten(value, field))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, prefix))
        return errors
    return [{"field": prefix or "non_field_errors", "message": str(detail)}]


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF exception handler producing the standard error body."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        return error_response(
            VALIDATION_FAILED,
            "Validation failed",
            response.status_code,
            validation_errors=_flatten(exc.detail),
        )

    code = getattr(exc, "default_code", "error")
    detail = getattr(exc, "detail", str(exc))
    shaped = error_response(str(code).upper(), str(detail), response.status_code)
    for header in ("Allow", "WWW-Authenticate", "Retry-After"):
        if header in response:
            shaped[header] = response[header]
    return shaped
