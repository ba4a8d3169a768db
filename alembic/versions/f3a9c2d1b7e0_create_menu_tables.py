"""create_menu_tables

Revision ID: f3a9c2d1b7e0
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "f3a9c2d1b7e0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Apply migration - create restaurant, menu, menu_item and menu_entry tables."""
    op.create_table(
        "restaurant",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_restaurant_name_not_blank"),
    )
    op.create_index("ix_restaurant_name", "restaurant", ["name"], unique=True)

    op.create_table(
        "menu",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurant.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("restaurant_id", "name", name="uq_menu_restaurant_name"),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_menu_name_not_blank"),
    )
    op.create_index("ix_menu_restaurant_id", "menu", ["restaurant_id"])

    op.create_table(
        "menu_item",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        # GRAIN PROTECTION: one row per (name, price)
        sa.UniqueConstraint("name", "price", name="uq_menu_item_name_price"),
        sa.CheckConstraint("price > 0", name="ck_menu_item_price_positive"),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_menu_item_name_not_blank"),
    )

    op.create_table(
        "menu_entry",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("menu_id", sa.Integer(), nullable=False),
        sa.Column("menu_item_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["menu_id"], ["menu.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["menu_item_id"], ["menu_item.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("menu_id", "menu_item_id", name="uq_menu_entry_menu_item"),
    )
    op.create_index("ix_menu_entry_menu_id", "menu_entry", ["menu_id"])
    op.create_index("ix_menu_entry_menu_item_id", "menu_entry", ["menu_item_id"])


def downgrade() -> None:
    """Revert migration - drop menu tables."""
    op.drop_index("ix_menu_entry_menu_item_id", table_name="menu_entry")
    op.drop_index("ix_menu_entry_menu_id", table_name="menu_entry")
    op.drop_table("menu_entry")
    op.drop_table("menu_item")
    op.drop_index("ix_menu_restaurant_id", table_name="menu")
    op.drop_table("menu")
    op.drop_index("ix_restaurant_name", table_name="restaurant")
    op.drop_table("restaurant")
