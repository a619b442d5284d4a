"""
errors.py - Standard {error: {code, message, details}} response builders.

Shared by main.py exception handlers and the feature routers so every
non-2xx body has the same shape.
"""
from __future__ import annotations

import json
from typing import Any

from fastapi.responses import JSONResponse

from naijatax.calculator.schemas import ErrorBody, ErrorDetail, ErrorResponse


def make_error_response(
    code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    status_code: int = 500,
) -> JSONResponse:
    """Build a standard {error: {code, message, details}} response."""
    body = ErrorResponse(
        error=ErrorBody(
            code=code,
            message=message,
            details=[ErrorDetail(**d) for d in (details or [])],
        )
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def make_validation_error_response(violations_json: str) -> JSONResponse:
    """Parse JSON-encoded violations from a validator and return a 422 envelope."""
    try:
        violations: list[dict] = json.loads(violations_json)
    except (json.JSONDecodeError, ValueError):
        violations = [{"field": None, "issue": violations_json}]
    details = [{"field": v.get("field"), "issue": v["issue"]} for v in violations]
    return make_error_response(
        code="VALIDATION_ERROR",
        message="Input validation failed",
        details=details,
        status_code=422,
    )
