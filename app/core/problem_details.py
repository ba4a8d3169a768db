"""RFC 7807 problem documents for the administration endpoints.

Reference: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.logging import request_id_ctx

ERROR_TYPE_BASE = "/errors"

ERROR_TYPES = {
    "NOT_FOUND": f"{ERROR_TYPE_BASE}/not-found",
    "VALIDATION_ERROR": f"{ERROR_TYPE_BASE}/validation",
    "CONFLICT": f"{ERROR_TYPE_BASE}/conflict",
    "INTERNAL_ERROR": f"{ERROR_TYPE_BASE}/internal",
}


def error_type_uri(error_code: str) -> str:
    """Problem ``type`` for an error code; unknown codes get a derived path."""
    slug = error_code.lower().replace("_", "-")
    return ERROR_TYPES.get(error_code, f"{ERROR_TYPE_BASE}/{slug}")


class ProblemDetail(BaseModel):
    """RFC 7807 problem document.

    Unknown keys are allowed so callers can attach extension members such as
    ``restaurant_id`` or ``name``.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="Problem type URI.")
    title: str = Field(..., description="Short summary of the problem type.")
    status: int = Field(..., ge=400, le=599, description="HTTP status code.")
    detail: str | None = Field(None, description="Occurrence-specific explanation.")
    instance: str | None = Field(None, description="Occurrence URI reference.")
    errors: list[dict[str, Any]] | None = Field(None, description="Field-level errors.")
    code: str | None = Field(None, description="Machine-readable error code.")
    request_id: str | None = Field(None, description="Request correlation ID.")


class ProblemDetailResponse(JSONResponse):
    media_type = "application/problem+json"


def create_problem_detail(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
    extensions: dict[str, Any] | None = None,
) -> ProblemDetail:
    """Build a problem document bound to the current request id.

    Args:
        status: HTTP status code.
        title: Short problem summary.
        detail: Explanation of this occurrence.
        error_code: Application error code; selects the ``type`` URI.
        errors: Field-level validation errors.
        extensions: Extra members copied into the document. Keys that clash
            with standard members are ignored.

    Returns:
        Problem document.
    """
    request_id = request_id_ctx.get()
    extra = {
        key: value
        for key, value in (extensions or {}).items()
        if key not in ProblemDetail.model_fields
    }

    return ProblemDetail(
        type=error_type_uri(error_code),
        title=title,
        status=status,
        detail=detail,
        instance=f"/requests/{request_id}" if request_id else None,
        errors=errors,
        code=error_code,
        request_id=request_id,
        **extra,
    )


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
    extensions: dict[str, Any] | None = None,
) -> ProblemDetailResponse:
    """Render a problem document as an ``application/problem+json`` response."""
    problem = create_problem_detail(
        status=status,
        title=title,
        detail=detail,
        error_code=error_code,
        errors=errors,
        extensions=extensions,
    )
    return ProblemDetailResponse(
        status_code=status,
        content=problem.model_dump(mode="json", exclude_none=True),
    )
