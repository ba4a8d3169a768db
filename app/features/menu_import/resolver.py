"""Upsert-or-skip resolution of a single entity.

``UpsertResolver.resolve`` is the idempotence primitive of the importer:
the natural key (never a surrogate id) identifies the row, so resolving the
same attributes twice yields the same row and creates nothing the second time.
Validation failures come back as a ``Skipped`` value instead of an exception.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.database import Base
from app.core.logging import get_logger
from app.features.menus.gateway import GatewayConflictError, MenuGatewayProtocol
from app.features.menus.models import Menu, MenuItem, Restaurant
from app.features.menus.schemas import MenuItemKey, MenuKey, RestaurantKey, describe_errors

logger = get_logger(__name__)

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class Scope:
    """Where an entity is resolved: its model, key schema and parent columns.

    Attributes:
        label: Model name used in report notices.
        model: ORM model class.
        key_schema: Pydantic schema normalizing and validating the key.
        parent: Columns fixed by the enclosing record (e.g. ``restaurant_id``).
    """

    label: str
    model: type[Base]
    key_schema: type[BaseModel]
    parent: Mapping[str, Any] = field(default_factory=dict)


RESTAURANTS = Scope("Restaurant", Restaurant, RestaurantKey)
MENU_ITEMS = Scope("MenuItem", MenuItem, MenuItemKey)


def menus_of(restaurant: Restaurant) -> Scope:
    """Scope for menus owned by ``restaurant``."""
    return Scope("Menu", Menu, MenuKey, {"restaurant_id": restaurant.id})


@dataclass(frozen=True)
class Resolved(Generic[EntityT]):
    """Entity found or created for the requested key."""

    entity: EntityT


@dataclass(frozen=True)
class Skipped:
    """The record failed validation; its subtree must not be imported."""

    model: str
    reason: str


class UpsertResolver:
    """Create-or-fetch one entity per call through a persistence gateway."""

    def __init__(self, gateway: MenuGatewayProtocol) -> None:
        self._gateway = gateway

    async def resolve(
        self,
        scope: Scope,
        attributes: Mapping[str, Any],
    ) -> Resolved[Any] | Skipped:
        """Resolve one entity by natural key.

        Args:
            scope: Target model, key schema and parent columns.
            attributes: Raw natural-key attributes from the document.

        Returns:
            ``Resolved`` with the existing or new row, or ``Skipped`` with a
            readable reason when the key is invalid or collides.
        """
        try:
            key = scope.key_schema.model_validate(dict(attributes))
        except ValidationError as e:
            return Skipped(scope.label, describe_errors(e))

        lookup = {**key.model_dump(), **scope.parent}
        try:
            entity = await self._gateway.find_or_create(scope.model, lookup)
        except GatewayConflictError as e:
            logger.warning("menu_import.resolve_conflict", model=scope.label, key=e.key)
            return Skipped(scope.label, e.detail)

        return Resolved(entity)
