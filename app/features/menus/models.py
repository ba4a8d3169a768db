"""Restaurant menu ORM models.

Tables:
- restaurant: one row per restaurant name
- menu: named menu owned by a restaurant
- menu_item: dish identified by its (name, price) natural key
- menu_entry: join row linking a menu item to a menu

Menu items are shared between menus (and restaurants). Deleting a menu removes
its entries but never the items themselves.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

NAME_MAX_LENGTH = 255


class TimestampMixin:
    """Database-maintained ``created_at`` / ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Restaurant(TimestampMixin, Base):
    """Restaurant record.

    Attributes:
        id: Primary key.
        name: Trimmed, non-blank restaurant name (natural key).
    """

    __tablename__ = "restaurant"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), unique=True, index=True)

    menus: Mapped[list["Menu"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Menu.id",
    )

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="ck_restaurant_name_not_blank"),
    )


class Menu(TimestampMixin, Base):
    """Menu belonging to exactly one restaurant.

    Attributes:
        id: Primary key.
        name: Trimmed, non-blank menu name, unique per restaurant.
        restaurant_id: Owning restaurant (FK, cascades on delete).
    """

    __tablename__ = "menu"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    restaurant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("restaurant.id", ondelete="CASCADE"), index=True
    )

    restaurant: Mapped["Restaurant"] = relationship(back_populates="menus")
    entries: Mapped[list["MenuEntry"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    menu_items: Mapped[list["MenuItem"]] = relationship(
        secondary="menu_entry",
        viewonly=True,
        order_by="MenuItem.id",
    )

    __table_args__ = (
        UniqueConstraint("restaurant_id", "name", name="uq_menu_restaurant_name"),
        CheckConstraint("length(trim(name)) > 0", name="ck_menu_name_not_blank"),
    )


class MenuItem(TimestampMixin, Base):
    """Menu item shared across menus.

    CRITICAL: (name, price) is the natural key. Two items with the same name
    and different prices are distinct rows.

    Attributes:
        id: Primary key.
        name: Trimmed, non-blank item name.
        price: Positive price in whole currency units.
    """

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    price: Mapped[int] = mapped_column(Integer)

    entries: Mapped[list["MenuEntry"]] = relationship(
        back_populates="menu_item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "price", name="uq_menu_item_name_price"),
        CheckConstraint("price > 0", name="ck_menu_item_price_positive"),
        CheckConstraint("length(trim(name)) > 0", name="ck_menu_item_name_not_blank"),
    )


class MenuEntry(TimestampMixin, Base):
    """Link between a menu and a menu item.

    Attributes:
        id: Primary key.
        menu_id: Menu (FK, cascades on delete).
        menu_item_id: Menu item (FK, cascades on delete).
    """

    __tablename__ = "menu_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    menu_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu.id", ondelete="CASCADE"), index=True
    )
    menu_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu_item.id", ondelete="CASCADE"), index=True
    )

    menu: Mapped["Menu"] = relationship(back_populates="entries")
    menu_item: Mapped["MenuItem"] = relationship(back_populates="entries")

    __table_args__ = (
        UniqueConstraint("menu_id", "menu_item_id", name="uq_menu_entry_menu_item"),
    )
