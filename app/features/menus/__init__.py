"""Menu entities and the persistence gateway used by the importer."""

from app.features.menus.gateway import GatewayConflictError, MenuGateway, MenuGatewayProtocol
from app.features.menus.models import Menu, MenuEntry, MenuItem, Restaurant
from app.features.menus.schemas import MenuItemKey, MenuKey, RestaurantKey

__all__ = [
    "GatewayConflictError",
    "Menu",
    "MenuEntry",
    "MenuGateway",
    "MenuGatewayProtocol",
    "MenuItem",
    "MenuItemKey",
    "MenuKey",
    "Restaurant",
    "RestaurantKey",
]
