"""Natural-key schemas for menu entities.

Raw document values are normalized before validation (names trimmed, prices
truncated to whole units), so lookups and inserts always see the stored form.
A failed validation is reported as a readable reason such as
``"Name can't be blank, Price must be greater than 0"``.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError

from app.features.menus.models import NAME_MAX_LENGTH

PRICE_MAX = 2_147_483_647  # INTEGER column upper bound


def normalize_name(value: Any) -> str | None:
    """Trim a raw name.

    Numbers are stringified; any other shape (maps, lists, booleans) is
    treated as absent.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int | float | Decimal):
        return str(value)
    return None


def _whole_units(value: float | Decimal) -> int:
    # Out-of-range magnitudes are clamped just past the column bound before
    # int() so huge exponents ("1e10000000") never build a huge integer.
    if value >= PRICE_MAX + 1:
        return PRICE_MAX + 1
    if value <= -(PRICE_MAX + 1):
        return -(PRICE_MAX + 1)
    return math.trunc(value)


def coerce_price(value: Any) -> int | None:
    """Coerce a raw price to whole currency units, truncating toward zero.

    ``10``, ``10.00`` and ``"10"`` all become ``10``; ``9.99`` becomes ``9``.
    Truncation is the documented storage rule for fractional prices.
    Values beyond the INTEGER column range come back as ``PRICE_MAX + 1``
    (or its negative) so validation rejects them without converting the
    full magnitude. Anything that is not a finite number (or numeric
    string) yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    if isinstance(value, float):
        return _whole_units(value) if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return _whole_units(value) if value.is_finite() else None
    return None


def _validate_name(value: Any) -> str:
    name = normalize_name(value)
    if not name:
        raise ValueError("can't be blank")
    if len(name) > NAME_MAX_LENGTH:
        raise ValueError(f"is too long (maximum is {NAME_MAX_LENGTH} characters)")
    return name


def _validate_price(value: Any) -> int:
    price = coerce_price(value)
    if price is None:
        raise ValueError("can't be blank")
    if price <= 0:
        raise ValueError("must be greater than 0")
    if price > PRICE_MAX:
        raise ValueError(f"must be less than or equal to {PRICE_MAX}")
    return price


EntityName = Annotated[str, BeforeValidator(_validate_name)]
Price = Annotated[int, BeforeValidator(_validate_price)]


class RestaurantKey(BaseModel):
    """Natural key of a restaurant."""

    model_config = ConfigDict(frozen=True)

    name: EntityName


class MenuKey(BaseModel):
    """Natural key of a menu, within its restaurant."""

    model_config = ConfigDict(frozen=True)

    name: EntityName


class MenuItemKey(BaseModel):
    """Natural key of a menu item: name and price together."""

    model_config = ConfigDict(frozen=True)

    name: EntityName
    price: Price


def describe_errors(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into ``"<Field> <message>"`` phrases.

    Args:
        exc: Validation error raised by a key schema.

    Returns:
        Comma-separated messages, e.g. ``"Name can't be blank"``.
    """
    messages: list[str] = []
    for error in exc.errors():
        field = " ".join(str(part) for part in error["loc"]).replace("_", " ").capitalize()
        ctx_error = error.get("ctx", {}).get("error")
        message = str(ctx_error) if ctx_error is not None else str(error["msg"]).lower()
        messages.append(f"{field} {message}".strip())
    return ", ".join(messages)
