"""Menu import API route."""

import time

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging import get_logger
from app.features.menu_import.schemas import ImportResult
from app.features.menu_import.service import MenuImportService

logger = get_logger(__name__)

router = APIRouter(prefix="/restaurants", tags=["import"])

NO_DATA_PROVIDED = "No file or JSON data provided"


def _declared_length(request: Request) -> int:
    try:
        return int(request.headers.get("content-length", "0"))
    except ValueError:
        return 0


def _too_large_message() -> str:
    settings = get_settings()
    return f"File too large. Maximum size is {settings.import_max_body_megabytes}MB"


def _failure(result: ImportResult) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=result.to_payload(),
    )


async def _read_source(request: Request) -> bytes | str | None:
    """Return the uploaded ``file`` field, else the raw body; None if empty."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if isinstance(upload, UploadFile):
            data = await upload.read()
            return data if data.strip() else None
        if isinstance(upload, str) and upload.strip():
            return upload
        return None

    body = await request.body()
    return body if body.strip() else None


@router.post(
    "/import",
    response_model=ImportResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={422: {"model": ImportResult}},
    summary="Import restaurants, menus and menu items from JSON",
    description="""
Import a restaurants document, either as a multipart `file` field or as the
raw request body.

**Idempotency:** Records are matched on natural keys (restaurant name, menu
name within its restaurant, menu item name + price). Re-importing the same
document creates no new rows and no new links.

**Partial Success:** Invalid records (blank names, missing or non-positive
prices, menus using the unsupported `dishes` key) are skipped together with
their children. The call still succeeds.

**Failures (422):** malformed JSON, a document without a `restaurants` array,
a body above the size ceiling, or an unexpected error. Nothing is written.
""",
)
async def import_restaurants(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Import a restaurants document.

    Args:
        request: Incoming request carrying a file upload or raw JSON body.
        db: Async database session from dependency.

    Returns:
        200 with ``{"success": true}`` or 422 with the failure payload.
    """
    start_time = time.perf_counter()
    max_bytes = get_settings().import_max_body_bytes

    declared = _declared_length(request)
    if declared > max_bytes:
        logger.warning("menu_import.request_too_large", content_length=declared)
        return _failure(ImportResult.request_failure(_too_large_message()))

    try:
        source = await _read_source(request)
        if source is None:
            return _failure(ImportResult.request_failure(NO_DATA_PROVIDED))
        if len(source) > max_bytes:
            logger.warning("menu_import.request_too_large", content_length=len(source))
            return _failure(ImportResult.request_failure(_too_large_message()))

        logger.info("menu_import.request_received", size_bytes=len(source))

        service = MenuImportService(db)
        result = await service.import_document(source)
    except Exception as e:
        logger.error(
            "menu_import.request_failed",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return _failure(ImportResult.request_failure(str(e)))

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "menu_import.request_completed",
        success=result.success,
        error_code=result.error_code,
        duration_ms=round(duration_ms, 2),
        **service.report.summary(),
    )

    if not result.success:
        return _failure(result)
    return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_payload())
