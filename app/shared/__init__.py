"""Utilities shared across features."""

from app.shared.schemas import MAX_PAGE_SIZE, PaginatedResponse, PaginationParams
from app.shared.utils import paginate_response

__all__ = [
    "MAX_PAGE_SIZE",
    "PaginatedResponse",
    "PaginationParams",
    "paginate_response",
]
