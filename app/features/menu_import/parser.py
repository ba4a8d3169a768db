"""Document parsing and top-level structure validation.

Both checks run before any persistence call, so a malformed document never
produces partial writes.
"""

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

EMPTY_OR_INVALID_INPUT = "Empty or invalid input"
INVALID_STRUCTURE = "Invalid JSON structure: expected 'restaurants' array"


class DocumentParseError(ValueError):
    """Input is not valid JSON, or decodes to an empty/non-object document."""


class DocumentStructureError(ValueError):
    """Top-level document lacks a ``restaurants`` list."""

    def __init__(self, message: str = INVALID_STRUCTURE) -> None:
        super().__init__(message)


def _loads(text: str | bytes | bytearray) -> Any:
    # Integers decode as Decimal so oversized literals reach per-record
    # validation instead of tripping the int() digit limit.
    return json.loads(text, parse_int=Decimal)


def _decode(source: Any) -> Any:
    if isinstance(source, Mapping):
        return dict(source)
    if isinstance(source, str | bytes | bytearray):
        return _loads(source)
    read = getattr(source, "read", None)
    if callable(read):
        return _loads(read())
    return None


def parse_document(source: Any) -> dict[str, Any]:
    """Parse raw input into a generic JSON object.

    Accepts JSON text, raw bytes, an already-decoded mapping, or any object
    with a ``read()`` method returning text or bytes.

    Args:
        source: Raw import input.

    Returns:
        Decoded top-level object.

    Raises:
        DocumentParseError: If decoding fails, or the document is empty,
            ``null`` or not an object.
    """
    try:
        parsed = _decode(source)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; nesting past
        # the interpreter recursion limit surfaces as RecursionError.
        raise DocumentParseError(str(e) or type(e).__name__) from e

    if not parsed or not isinstance(parsed, dict):
        raise DocumentParseError(EMPTY_OR_INVALID_INPUT)
    return parsed


def validate_structure(document: Mapping[str, Any]) -> list[Any]:
    """Return the ``restaurants`` list of a parsed document.

    Args:
        document: Parsed top-level object.

    Returns:
        The raw restaurant nodes.

    Raises:
        DocumentStructureError: If ``restaurants`` is absent or not a list.
    """
    restaurants = document.get("restaurants")
    if not isinstance(restaurants, list):
        raise DocumentStructureError()
    return restaurants
