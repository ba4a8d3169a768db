"""Typed views over raw document nodes.

Every level of the document goes through the same step: a raw value either
becomes a typed node carrying its natural-key attributes and raw children, or
a ``NodeSkip`` explaining why it cannot be imported.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

INVALID_DATA = "invalid data"
DISHES_NOT_SUPPORTED = "dishes key not supported"


@dataclass(frozen=True)
class NodeSkip:
    """A raw node rejected before any persistence call."""

    reason: str


@dataclass(frozen=True)
class RestaurantNode:
    name: Any
    menus: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class MenuNode:
    name: Any
    menu_items: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class MenuItemNode:
    name: Any
    price: Any


def _children(raw: Mapping[str, Any], key: str) -> list[Any]:
    value = raw.get(key)
    return value if isinstance(value, list) else []


def read_restaurant(raw: Any) -> RestaurantNode | NodeSkip:
    """Read a restaurant node; non-objects are skipped."""
    if not isinstance(raw, Mapping):
        return NodeSkip(INVALID_DATA)
    return RestaurantNode(name=raw.get("name"), menus=_children(raw, "menus"))


def read_menu(raw: Any) -> MenuNode | NodeSkip:
    """Read a menu node.

    Menus carrying the legacy ``dishes`` key are rejected even when
    ``menu_items`` is also present.
    """
    if not isinstance(raw, Mapping):
        return NodeSkip(INVALID_DATA)
    if "dishes" in raw:
        return NodeSkip(DISHES_NOT_SUPPORTED)
    return MenuNode(name=raw.get("name"), menu_items=_children(raw, "menu_items"))


def read_menu_item(raw: Any) -> MenuItemNode | NodeSkip:
    """Read a menu item node; non-objects are skipped."""
    if not isinstance(raw, Mapping):
        return NodeSkip(INVALID_DATA)
    return MenuItemNode(name=raw.get("name"), price=raw.get("price"))
