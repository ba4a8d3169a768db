"""Shared helpers for list endpoints."""

from typing import TypeVar

from app.shared.schemas import PaginatedResponse, PaginationParams

T = TypeVar("T")


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` rows; 0 when there are none."""
    return -(-total // page_size) if total > 0 else 0


def paginate_response(
    items: list[T],
    total: int,
    pagination: PaginationParams,
) -> PaginatedResponse[T]:
    """Wrap one page of ``items`` with the totals of the full query.

    Args:
        items: Rows of the requested page.
        total: Row count of the unpaginated query.
        pagination: Page selection the rows were fetched with.

    Returns:
        Paginated response.
    """
    return PaginatedResponse[T](
        items=items,
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
        pages=page_count(total, pagination.page_size),
    )
