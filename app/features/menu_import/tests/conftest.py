"""Fixtures for menu import tests."""

from typing import Any

import pytest


@pytest.fixture
def restaurants_document() -> dict[str, Any]:
    """Two restaurants sharing dishes across menus, with one repeated dish."""
    return {
        "restaurants": [
            {
                "name": "Poppo's Cafe",
                "menus": [
                    {
                        "name": "lunch",
                        "menu_items": [
                            {"name": "Burger", "price": 9.00},
                            {"name": "Small Salad", "price": 5.00},
                        ],
                    },
                    {
                        "name": "dinner",
                        "menu_items": [
                            {"name": "Burger", "price": 15.00},
                            {"name": "Large Salad", "price": 8.00},
                        ],
                    },
                ],
            },
            {
                "name": "Casa del Poppo",
                "menus": [
                    {
                        "name": "lunch",
                        "menu_items": [
                            {"name": "Chicken Wings", "price": 9.00},
                            {"name": "Burger", "price": 9.00},
                            {"name": "Chicken Wings", "price": 9.00},
                        ],
                    },
                ],
            },
        ]
    }
