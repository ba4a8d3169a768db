"""Persistence gateway for menu entities.

Exposes the two primitives the import pipeline needs:

- ``find_or_create``: fetch a row by its natural key, inserting it when absent.
- ``link``: attach a menu item to a menu unless the link already exists.

Inserts run inside a SAVEPOINT. A unique-constraint violation on insert means
a concurrent writer created the row first; the savepoint is rolled back and
the row is re-fetched by the same key.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import Base
from app.core.logging import get_logger
from app.features.menus.models import Menu, MenuEntry, MenuItem

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class GatewayConflictError(Exception):
    """Insert collided on a constraint and no row matches the natural key."""

    def __init__(self, model: type[Base], key: Mapping[str, Any], detail: str) -> None:
        super().__init__(f"{model.__name__} {dict(key)!r} conflicts: {detail}")
        self.model = model
        self.key = dict(key)
        self.detail = detail


@runtime_checkable
class MenuGatewayProtocol(Protocol):
    """Protocol for the persistence operations used by the importer."""

    async def find_or_create(self, model: type[ModelT], key: Mapping[str, Any]) -> ModelT:
        """Return the row matching ``key``, creating it if needed."""
        ...

    async def link(self, menu: Menu, item: MenuItem) -> bool:
        """Link ``item`` to ``menu``; return True if a new link was created."""
        ...


class MenuGateway:
    """SQLAlchemy-backed gateway bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find(self, model: type[ModelT], key: Mapping[str, Any]) -> ModelT | None:
        """Fetch a row by exact natural-key match.

        Args:
            model: ORM model class.
            key: Column values identifying the row.

        Returns:
            The matching row, or None.
        """
        stmt = select(model).filter_by(**key).limit(1)
        result = await self._db.execute(stmt)
        return result.scalars().first()

    async def find_or_create(self, model: type[ModelT], key: Mapping[str, Any]) -> ModelT:
        """Fetch a row by natural key or insert it.

        Args:
            model: ORM model class.
            key: Normalized natural-key column values.

        Returns:
            Existing or newly created row (callers cannot tell which).

        Raises:
            GatewayConflictError: If the insert violates a constraint and no
                row with this key exists afterwards.
        """
        existing = await self.find(model, key)
        if existing is not None:
            return existing

        entity = model(**key)
        try:
            async with self._db.begin_nested():
                self._db.add(entity)
                await self._db.flush()
        except IntegrityError as e:
            logger.info(
                "menus.gateway.insert_conflict",
                model=model.__name__,
                key=dict(key),
                error=str(e.orig),
            )
            existing = await self.find(model, key)
            if existing is None:
                raise GatewayConflictError(model, key, str(e.orig)) from e
            return existing

        return entity

    async def link(self, menu: Menu, item: MenuItem) -> bool:
        """Create a menu entry unless one already links this menu and item.

        Args:
            menu: Persisted menu.
            item: Persisted menu item.

        Returns:
            True if a new entry was inserted, False if it already existed.
        """
        key = {"menu_id": menu.id, "menu_item_id": item.id}
        if await self.find(MenuEntry, key) is not None:
            return False

        try:
            async with self._db.begin_nested():
                self._db.add(MenuEntry(**key))
                await self._db.flush()
        except IntegrityError:
            if await self.find(MenuEntry, key) is None:
                raise
            return False

        return True
