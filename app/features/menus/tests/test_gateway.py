"""Tests for the menu persistence gateway against SQLite."""

import pytest
from sqlalchemy import func, select

from app.features.menus.gateway import GatewayConflictError, MenuGateway, MenuGatewayProtocol
from app.features.menus.models import Menu, MenuEntry, MenuItem, Restaurant


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class RacingGateway(MenuGateway):
    """Gateway whose first lookup misses, as if another writer inserted concurrently."""

    def __init__(self, db) -> None:
        super().__init__(db)
        self.lookups = 0

    async def find(self, model, key):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return await super().find(model, key)


class TestMenuGateway:
    """Tests for find_or_create and link."""

    async def test_satisfies_protocol(self, db_session):
        assert isinstance(MenuGateway(db_session), MenuGatewayProtocol)

    async def test_find_or_create_inserts_once(self, db_session):
        gateway = MenuGateway(db_session)

        first = await gateway.find_or_create(Restaurant, {"name": "Poppo's Cafe"})
        second = await gateway.find_or_create(Restaurant, {"name": "Poppo's Cafe"})

        assert first.id is not None
        assert first.id == second.id
        assert await _count(db_session, Restaurant) == 1

    async def test_find_returns_none_when_absent(self, db_session):
        gateway = MenuGateway(db_session)
        assert await gateway.find(Restaurant, {"name": "Nowhere"}) is None

    async def test_menu_key_is_scoped_to_restaurant(self, db_session):
        gateway = MenuGateway(db_session)
        a = await gateway.find_or_create(Restaurant, {"name": "A"})
        b = await gateway.find_or_create(Restaurant, {"name": "B"})

        lunch_a = await gateway.find_or_create(Menu, {"name": "lunch", "restaurant_id": a.id})
        lunch_b = await gateway.find_or_create(Menu, {"name": "lunch", "restaurant_id": b.id})

        assert lunch_a.id != lunch_b.id
        assert await _count(db_session, Menu) == 2

    async def test_menu_item_key_includes_price(self, db_session):
        gateway = MenuGateway(db_session)

        cheap = await gateway.find_or_create(MenuItem, {"name": "Burger", "price": 9})
        dear = await gateway.find_or_create(MenuItem, {"name": "Burger", "price": 15})
        again = await gateway.find_or_create(MenuItem, {"name": "Burger", "price": 9})

        assert cheap.id != dear.id
        assert again.id == cheap.id
        assert await _count(db_session, MenuItem) == 2

    async def test_concurrent_insert_is_refetched(self, db_session):
        existing = await MenuGateway(db_session).find_or_create(Restaurant, {"name": "Raced"})

        gateway = RacingGateway(db_session)
        result = await gateway.find_or_create(Restaurant, {"name": "Raced"})

        assert result.id == existing.id
        assert gateway.lookups == 2
        assert await _count(db_session, Restaurant) == 1

    async def test_constraint_violation_without_match_raises(self, db_session):
        gateway = MenuGateway(db_session)

        with pytest.raises(GatewayConflictError) as exc_info:
            await gateway.find_or_create(MenuItem, {"name": "Free lunch", "price": -1})

        assert exc_info.value.model is MenuItem
        assert exc_info.value.key == {"name": "Free lunch", "price": -1}
        assert await _count(db_session, MenuItem) == 0

    async def test_session_usable_after_conflict(self, db_session):
        gateway = MenuGateway(db_session)
        with pytest.raises(GatewayConflictError):
            await gateway.find_or_create(MenuItem, {"name": "Bad", "price": 0})

        item = await gateway.find_or_create(MenuItem, {"name": "Good", "price": 5})
        assert item.id is not None

    async def test_link_is_idempotent(self, db_session):
        gateway = MenuGateway(db_session)
        restaurant = await gateway.find_or_create(Restaurant, {"name": "R"})
        menu = await gateway.find_or_create(
            Menu, {"name": "dinner", "restaurant_id": restaurant.id}
        )
        item = await gateway.find_or_create(MenuItem, {"name": "Soup", "price": 6})

        assert await gateway.link(menu, item) is True
        assert await gateway.link(menu, item) is False
        assert await _count(db_session, MenuEntry) == 1


class TestCascades:
    """Deleting owners removes dependent rows, never shared items."""

    async def _seed(self, db_session):
        gateway = MenuGateway(db_session)
        restaurant = await gateway.find_or_create(Restaurant, {"name": "R"})
        menu = await gateway.find_or_create(
            Menu, {"name": "lunch", "restaurant_id": restaurant.id}
        )
        item = await gateway.find_or_create(MenuItem, {"name": "Salad", "price": 7})
        await gateway.link(menu, item)
        return restaurant, menu, item

    async def test_deleting_restaurant_removes_menus_and_entries(self, db_session):
        restaurant, _, _ = await self._seed(db_session)

        await db_session.delete(restaurant)
        await db_session.flush()

        assert await _count(db_session, Restaurant) == 0
        assert await _count(db_session, Menu) == 0
        assert await _count(db_session, MenuEntry) == 0
        assert await _count(db_session, MenuItem) == 1

    async def test_deleting_menu_keeps_items(self, db_session):
        _, menu, _ = await self._seed(db_session)

        await db_session.delete(menu)
        await db_session.flush()

        assert await _count(db_session, Menu) == 0
        assert await _count(db_session, MenuEntry) == 0
        assert await _count(db_session, MenuItem) == 1

    async def test_deleting_item_removes_its_entries(self, db_session):
        _, _, item = await self._seed(db_session)

        await db_session.delete(item)
        await db_session.flush()

        assert await _count(db_session, MenuItem) == 0
        assert await _count(db_session, MenuEntry) == 0
        assert await _count(db_session, Menu) == 1
