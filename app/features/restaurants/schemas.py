"""Pydantic schemas for restaurant administration endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.features.menus.schemas import EntityName
from app.shared.schemas import PaginatedResponse


class RestaurantCreate(BaseModel):
    """Request body for POST /restaurants."""

    name: EntityName = Field(..., description="Restaurant name; trimmed, must not be blank")


class RestaurantUpdate(BaseModel):
    """Request body for PATCH /restaurants/{restaurant_id}."""

    name: EntityName = Field(..., description="New restaurant name; trimmed, must not be blank")


class MenuItemResponse(BaseModel):
    """Menu item as listed under a menu."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: int = Field(..., description="Price in whole currency units")


class MenuResponse(BaseModel):
    """Menu with its linked items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    menu_items: list[MenuItemResponse] = Field(default_factory=list)


class RestaurantResponse(BaseModel):
    """Restaurant record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class RestaurantDetailResponse(RestaurantResponse):
    """Restaurant record with menus and their items."""

    menus: list[MenuResponse] = Field(default_factory=list)


RestaurantListResponse = PaginatedResponse[RestaurantResponse]
