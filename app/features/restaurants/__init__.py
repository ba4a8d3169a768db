"""Restaurant administration endpoints."""

from app.features.restaurants.routes import router
from app.features.restaurants.service import RestaurantService

__all__ = [
    "RestaurantService",
    "router",
]
