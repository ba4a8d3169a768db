"""Menu import service: parse, validate, then walk the hierarchy.

Pipeline:
    raw input -> parse_document -> validate_structure
    -> import_restaurants (one SAVEPOINT) -> ImportResult

Per-record problems (blank names, bad prices, ``dishes`` menus, non-object
nodes) skip that record and its subtree. Any other exception rolls the
savepoint back so nothing from the call is kept.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.menu_import.nodes import (
    NodeSkip,
    read_menu,
    read_menu_item,
    read_restaurant,
)
from app.features.menu_import.parser import (
    DocumentParseError,
    DocumentStructureError,
    parse_document,
    validate_structure,
)
from app.features.menu_import.report import ImportReport
from app.features.menu_import.resolver import (
    MENU_ITEMS,
    RESTAURANTS,
    Skipped,
    UpsertResolver,
    menus_of,
)
from app.features.menu_import.schemas import ImportResult
from app.features.menus.gateway import MenuGateway, MenuGatewayProtocol
from app.features.menus.models import Menu, Restaurant

logger = get_logger(__name__)


class MenuImportService:
    """Imports one restaurants document into the database.

    The service never commits. The walk runs inside a SAVEPOINT on ``db`` and
    the caller owns the enclosing transaction.
    """

    def __init__(
        self,
        db: AsyncSession,
        gateway: MenuGatewayProtocol | None = None,
    ) -> None:
        self._db = db
        self._gateway = gateway or MenuGateway(db)
        self._resolver = UpsertResolver(self._gateway)
        self.report = ImportReport()

    async def import_document(self, source: Any) -> ImportResult:
        """Run the full pipeline on raw input.

        Args:
            source: JSON text, bytes, a decoded mapping, or a readable stream.

        Returns:
            ``ImportResult.ok()`` or a failure carrying the message for its kind.
        """
        try:
            restaurants = validate_structure(parse_document(source))
            async with self._db.begin_nested():
                await self.import_restaurants(restaurants)
        except DocumentParseError as e:
            logger.warning("menu_import.parse_failed", error=str(e))
            return ImportResult.parse_failure(str(e))
        except DocumentStructureError as e:
            logger.warning("menu_import.structure_invalid", error=str(e))
            return ImportResult.structure_failure(str(e))
        except Exception as e:
            # The savepoint rolled back, so nothing counted so far was kept.
            self.report.reset()
            logger.error(
                "menu_import.failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return ImportResult.import_failure(str(e))

        logger.info("menu_import.completed", **self.report.summary())
        return ImportResult.ok()

    async def import_restaurants(self, restaurants: list[Any]) -> None:
        """Walk restaurant nodes depth-first, in document order."""
        for raw in restaurants:
            await self._import_restaurant(raw)

    async def _import_restaurant(self, raw: Any) -> None:
        node = read_restaurant(raw)
        if isinstance(node, NodeSkip):
            self.report.skip("Restaurant", node.reason)
            return

        outcome = await self._resolver.resolve(RESTAURANTS, {"name": node.name})
        if isinstance(outcome, Skipped):
            self.report.skip(outcome.model, outcome.reason)
            return

        restaurant: Restaurant = outcome.entity
        self.report.ok("Restaurant", restaurant.name)
        for raw_menu in node.menus:
            await self._import_menu(restaurant, raw_menu)

    async def _import_menu(self, restaurant: Restaurant, raw: Any) -> None:
        node = read_menu(raw)
        if isinstance(node, NodeSkip):
            self.report.skip("Menu", node.reason)
            return

        outcome = await self._resolver.resolve(menus_of(restaurant), {"name": node.name})
        if isinstance(outcome, Skipped):
            self.report.skip(outcome.model, outcome.reason)
            return

        menu: Menu = outcome.entity
        self.report.ok("Menu", menu.name)
        for raw_item in node.menu_items:
            await self._import_menu_item(menu, raw_item)

    async def _import_menu_item(self, menu: Menu, raw: Any) -> None:
        node = read_menu_item(raw)
        if isinstance(node, NodeSkip):
            self.report.skip("MenuItem", node.reason)
            return

        outcome = await self._resolver.resolve(
            MENU_ITEMS, {"name": node.name, "price": node.price}
        )
        if isinstance(outcome, Skipped):
            self.report.skip(outcome.model, outcome.reason)
            return

        item = outcome.entity
        self.report.ok("MenuItem", f"{item.name} (${item.price})")
        self.report.linked(await self._gateway.link(menu, item))


async def import_menu_document(db: AsyncSession, source: Any) -> ImportResult:
    """Import ``source`` using a fresh service bound to ``db``."""
    return await MenuImportService(db).import_document(source)
