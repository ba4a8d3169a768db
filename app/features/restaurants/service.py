"""Service layer for restaurant administration.

Thin wrappers over the ORM: list, show, create, rename, delete. Deleting a
restaurant cascades to its menus and their entries at the database level.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.features.menus.models import Menu, Restaurant
from app.features.restaurants.schemas import (
    RestaurantCreate,
    RestaurantDetailResponse,
    RestaurantListResponse,
    RestaurantResponse,
    RestaurantUpdate,
)
from app.shared.schemas import PaginationParams
from app.shared.utils import paginate_response

logger = get_logger(__name__)


class RestaurantService:
    """CRUD operations on restaurants."""

    async def list_restaurants(
        self,
        db: AsyncSession,
        pagination: PaginationParams,
    ) -> RestaurantListResponse:
        """List restaurants ordered by name.

        Args:
            db: Database session.
            pagination: Page number and size.

        Returns:
            Paginated list of restaurants.
        """
        total = (await db.execute(select(func.count()).select_from(Restaurant))).scalar_one()

        stmt = (
            select(Restaurant)
            .order_by(Restaurant.name)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        restaurants = (await db.execute(stmt)).scalars().all()

        logger.info(
            "restaurants.listed",
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

        return paginate_response(
            [RestaurantResponse.model_validate(r) for r in restaurants],
            total,
            pagination,
        )

    async def get_restaurant(
        self,
        db: AsyncSession,
        restaurant_id: int,
    ) -> RestaurantDetailResponse:
        """Get a restaurant with its menus and menu items.

        Raises:
            NotFoundError: If the restaurant does not exist.
        """
        stmt = (
            select(Restaurant)
            .where(Restaurant.id == restaurant_id)
            .options(selectinload(Restaurant.menus).selectinload(Menu.menu_items))
        )
        restaurant = (await db.execute(stmt)).scalar_one_or_none()
        if restaurant is None:
            raise NotFoundError(
                f"Restaurant not found: {restaurant_id}",
                details={"restaurant_id": restaurant_id},
            )
        return RestaurantDetailResponse.model_validate(restaurant)

    async def create_restaurant(
        self,
        db: AsyncSession,
        payload: RestaurantCreate,
    ) -> RestaurantResponse:
        """Create a restaurant.

        Raises:
            ConflictError: If a restaurant with this name already exists.
        """
        restaurant = Restaurant(name=payload.name)
        await self._flush(db, restaurant, payload.name)
        logger.info("restaurants.created", restaurant_id=restaurant.id, name=restaurant.name)
        return RestaurantResponse.model_validate(restaurant)

    async def update_restaurant(
        self,
        db: AsyncSession,
        restaurant_id: int,
        payload: RestaurantUpdate,
    ) -> RestaurantResponse:
        """Rename a restaurant.

        Raises:
            NotFoundError: If the restaurant does not exist.
            ConflictError: If another restaurant already uses the name.
        """
        restaurant = await self._get_or_404(db, restaurant_id)
        restaurant.name = payload.name
        await self._flush(db, restaurant, payload.name)
        logger.info("restaurants.updated", restaurant_id=restaurant.id, name=restaurant.name)
        return RestaurantResponse.model_validate(restaurant)

    async def delete_restaurant(self, db: AsyncSession, restaurant_id: int) -> None:
        """Delete a restaurant together with its menus and menu entries.

        Raises:
            NotFoundError: If the restaurant does not exist.
        """
        restaurant = await self._get_or_404(db, restaurant_id)
        await db.delete(restaurant)
        await db.flush()
        logger.info("restaurants.deleted", restaurant_id=restaurant_id)

    async def _get_or_404(self, db: AsyncSession, restaurant_id: int) -> Restaurant:
        restaurant = await db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundError(
                f"Restaurant not found: {restaurant_id}",
                details={"restaurant_id": restaurant_id},
            )
        return restaurant

    async def _flush(self, db: AsyncSession, restaurant: Restaurant, name: str) -> None:
        try:
            async with db.begin_nested():
                db.add(restaurant)
                await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Restaurant already exists: {name}",
                details={"name": name},
            ) from e
        # server-side timestamps
        await db.refresh(restaurant)
