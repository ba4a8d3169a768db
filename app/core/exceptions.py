"""Application exceptions and their FastAPI handlers.

Administration endpoints report failures as RFC 7807 problem details. The
import endpoint keeps its own ``{"success": ..., "error": ...}`` payload and
never routes pipeline failures through these handlers.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from app.core.logging import get_logger
from app.core.problem_details import ProblemDetailResponse, problem_response

logger = get_logger(__name__)


class MenuImporterError(Exception):
    """Base class for errors that map to an HTTP status.

    Attributes:
        message: Human-readable message, rendered as the problem ``detail``.
        code: Machine-readable error code.
        status_code: HTTP status code.
        details: Context rendered as problem extension members.
    """

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def title(self) -> str:
        """Problem ``title``, derived from the code (``NOT_FOUND`` -> ``Not Found``)."""
        return self.code.replace("_", " ").title()


class NotFoundError(MenuImporterError):
    """A requested restaurant does not exist."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ConflictError(MenuImporterError):
    """A write collides with an existing natural key."""

    code = "CONFLICT"
    status_code = 409
    default_message = "Resource conflict"


async def menu_importer_exception_handler(
    _request: Request,
    exc: MenuImporterError,
) -> ProblemDetailResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app.error_handled",
        error=exc.message,
        error_code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
    )

    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
        extensions=exc.details,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Render request validation errors with one entry per field.

    Field paths drop the leading ``body``/``query`` location, so a blank
    restaurant name is reported as ``name``.
    """
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field_errors.append(
            {
                "field": ".".join(loc),
                "message": str(error.get("msg", "Validation failed")),
                "type": str(error.get("type", "unknown")),
            }
        )

    logger.warning(
        "app.validation_error",
        path=request.url.path,
        fields=[e["field"] for e in field_errors],
    )

    return problem_response(
        status=422,
        title="Validation Error",
        detail=f"Request validation failed with {len(field_errors)} error(s).",
        error_code="VALIDATION_ERROR",
        errors=field_errors,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ProblemDetailResponse:
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )

    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred. Include the request_id when reporting it.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the problem-details handlers on ``app``."""
    app.add_exception_handler(MenuImporterError, menu_importer_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
