"""Fixtures for restaurant administration tests."""

import pytest

from app.features.menus.gateway import MenuGateway
from app.features.menus.models import Menu, MenuItem, Restaurant


@pytest.fixture
async def seeded_restaurant(db_session) -> Restaurant:
    """Restaurant with one menu holding two items."""
    gateway = MenuGateway(db_session)
    restaurant = await gateway.find_or_create(Restaurant, {"name": "Poppo's Cafe"})
    menu = await gateway.find_or_create(Menu, {"name": "lunch", "restaurant_id": restaurant.id})
    for name, price in (("Burger", 9), ("Small Salad", 5)):
        item = await gateway.find_or_create(MenuItem, {"name": name, "price": price})
        await gateway.link(menu, item)
    return restaurant
