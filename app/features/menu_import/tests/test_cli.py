"""Tests for the scripts/import_menu.py command."""

import json

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.features.menus.models import Restaurant
from scripts import import_menu


async def _keep_engine() -> None:
    """Stands in for dispose_engine so the in-memory database survives the command."""


@pytest.fixture
def cli_engine(engine, monkeypatch):
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(import_menu, "get_session_maker", lambda: session_maker)
    monkeypatch.setattr(import_menu, "dispose_engine", _keep_engine)
    return session_maker


async def _restaurant_count(session_maker) -> int:
    async with session_maker() as session:
        stmt = select(func.count()).select_from(Restaurant)
        return (await session.execute(stmt)).scalar_one()


class TestImportMenuCommand:
    async def test_imports_and_commits(self, cli_engine, tmp_path, capsys, restaurants_document):
        path = tmp_path / "restaurants.json"
        path.write_text(json.dumps(restaurants_document))

        exit_code = await import_menu.run_import(path)

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out.strip().splitlines()[-1]) == {"success": True}
        assert await _restaurant_count(cli_engine) == 2

    async def test_dry_run_rolls_back(self, cli_engine, tmp_path, restaurants_document):
        path = tmp_path / "restaurants.json"
        path.write_text(json.dumps(restaurants_document))

        exit_code = await import_menu.run_import(path, dry_run=True)

        assert exit_code == 0
        assert await _restaurant_count(cli_engine) == 0

    async def test_invalid_document_exits_non_zero(self, cli_engine, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text('{"data": []}')

        exit_code = await import_menu.run_import(path)

        assert exit_code == 1
        payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert payload["error_code"] == "STRUCTURE_ERROR"
        assert await _restaurant_count(cli_engine) == 0

    def test_missing_file(self, tmp_path, capsys):
        assert import_menu.main([str(tmp_path / "absent.json")]) == 1
        assert "File not found" in capsys.readouterr().err
