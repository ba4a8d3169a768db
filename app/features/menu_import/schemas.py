"""Pydantic schemas for the menu import result."""

from typing import Any, Literal

from pydantic import BaseModel, Field

ImportErrorCode = Literal["PARSE_ERROR", "STRUCTURE_ERROR", "IMPORT_ERROR", "REQUEST_ERROR"]


class ImportResult(BaseModel):
    """Terminal outcome of one import call.

    ``success`` and ``error`` form the documented payload. ``error_code`` lets
    callers branch on the failure kind without parsing ``error``.
    """

    success: bool = Field(..., description="True when the document was imported")
    error: str | None = Field(None, description="Human-readable failure message")
    error_code: ImportErrorCode | None = Field(
        None, description="Machine-readable failure kind"
    )

    @classmethod
    def ok(cls) -> "ImportResult":
        return cls(success=True)

    @classmethod
    def parse_failure(cls, detail: str) -> "ImportResult":
        return cls(success=False, error=f"JSON parsing error: {detail}", error_code="PARSE_ERROR")

    @classmethod
    def structure_failure(cls, message: str) -> "ImportResult":
        return cls(success=False, error=message, error_code="STRUCTURE_ERROR")

    @classmethod
    def import_failure(cls, detail: str) -> "ImportResult":
        return cls(success=False, error=f"Import error: {detail}", error_code="IMPORT_ERROR")

    @classmethod
    def request_failure(cls, message: str) -> "ImportResult":
        """Failure raised by the HTTP boundary before the pipeline runs."""
        return cls(success=False, error=message, error_code="REQUEST_ERROR")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the response body, omitting absent fields."""
        return self.model_dump(exclude_none=True)
