"""API routes for restaurant administration."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.features.restaurants.schemas import (
    RestaurantCreate,
    RestaurantDetailResponse,
    RestaurantListResponse,
    RestaurantResponse,
    RestaurantUpdate,
)
from app.features.restaurants.service import RestaurantService
from app.shared.schemas import MAX_PAGE_SIZE, PaginationParams

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get(
    "",
    response_model=RestaurantListResponse,
    summary="List restaurants",
)
async def list_restaurants(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=MAX_PAGE_SIZE, description="Restaurants per page"),
) -> RestaurantListResponse:
    """List restaurants ordered by name."""
    service = RestaurantService()
    pagination = PaginationParams(page=page, page_size=page_size)
    return await service.list_restaurants(db=db, pagination=pagination)


@router.get(
    "/{restaurant_id}",
    response_model=RestaurantDetailResponse,
    summary="Get restaurant by ID",
    description="Returns the restaurant with its menus and their menu items. 404 if absent.",
)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> RestaurantDetailResponse:
    """Get one restaurant with menus and items."""
    service = RestaurantService()
    return await service.get_restaurant(db=db, restaurant_id=restaurant_id)


@router.post(
    "",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create restaurant",
)
async def create_restaurant(
    payload: RestaurantCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> RestaurantResponse:
    """Create a restaurant; 409 if the name is taken."""
    service = RestaurantService()
    created = await service.create_restaurant(db=db, payload=payload)
    response.headers["Location"] = f"/restaurants/{created.id}"
    return created


@router.patch(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    summary="Rename restaurant",
)
async def update_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    db: AsyncSession = Depends(get_db),
) -> RestaurantResponse:
    """Rename a restaurant."""
    service = RestaurantService()
    return await service.update_restaurant(db=db, restaurant_id=restaurant_id, payload=payload)


@router.delete(
    "/{restaurant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete restaurant",
    description="Deletes the restaurant, its menus and their menu links. "
    "Menu items stay, since other menus may reference them.",
)
async def delete_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a restaurant."""
    service = RestaurantService()
    await service.delete_restaurant(db=db, restaurant_id=restaurant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
