#!/usr/bin/env python
"""Import a restaurants JSON document from disk.

Runs the same pipeline as POST /restaurants/import and commits on success.

Usage:
    uv run python scripts/import_menu.py data/restaurants.json
    uv run python scripts/import_menu.py data/restaurants.json --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog

from app.core.database import dispose_engine, get_session_maker
from app.core.logging import configure_logging, get_logger
from app.features.menu_import.service import MenuImportService

logger = get_logger("scripts.import_menu")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments (defaults to sys.argv[1:]).

    Returns:
        Parsed namespace.
    """
    parser = argparse.ArgumentParser(
        description="Import restaurants, menus and menu items from a JSON file.",
    )
    parser.add_argument("path", type=Path, help="Path to the JSON document")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the import and roll it back instead of committing",
    )
    return parser.parse_args(argv)


async def run_import(path: Path, dry_run: bool = False) -> int:
    """Import ``path`` and print the result payload.

    Args:
        path: JSON document to import.
        dry_run: Roll back instead of committing.

    Returns:
        Process exit code: 0 on success, 1 on failure.
    """
    structlog.contextvars.bind_contextvars(import_path=str(path), dry_run=dry_run)
    session_maker = get_session_maker()
    try:
        async with session_maker() as session:
            with path.open("rb") as fh:
                service = MenuImportService(session)
                result = await service.import_document(fh)

            if result.success and not dry_run:
                await session.commit()
            else:
                await session.rollback()
    finally:
        await dispose_engine()

    logger.info(
        "menu_import.cli_completed",
        success=result.success,
        **service.report.summary(),
    )
    print(json.dumps(result.to_payload()))
    return 0 if result.success else 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    if not args.path.is_file():
        print(f"File not found: {args.path}", file=sys.stderr)
        return 1

    return asyncio.run(run_import(args.path, dry_run=args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
