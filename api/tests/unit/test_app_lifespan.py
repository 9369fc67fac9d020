"""
Tests del ciclo de vida de la aplicacion (startup / shutdown).
"""
from unittest.mock import AsyncMock

import pytest

from backoffice.application.services.migration_scheduler import JOB_ID, MigrationScheduler
from backoffice.core import events
from backoffice.core.config import settings


@pytest.fixture
def patched_startup(monkeypatch, tmp_path):
    """Evita tocar la base de datos real y Google Sheets durante el arranque."""
    init_db = AsyncMock()
    close_db = AsyncMock()
    monkeypatch.setattr(events, "init_db", init_db)
    monkeypatch.setattr(events, "close_db", close_db)
    monkeypatch.setattr(events, "build_from_settings", lambda _settings: None)
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "app.log"))
    monkeypatch.setattr(settings, "MIGRATION_SCHEDULER_ENABLED", True)
    return init_db, close_db


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_scheduler(patched_startup):
    from main import create_application

    init_db, close_db = patched_startup
    app = create_application()

    async with app.router.lifespan_context(app):
        init_db.assert_awaited_once()
        assert isinstance(app.state.migration_scheduler, MigrationScheduler)
        assert app.state.sheets_gateway is None
        assert app.state.scheduler.running is True
        assert app.state.scheduler.get_job(JOB_ID) is not None
        close_db.assert_not_awaited()

    assert app.state.scheduler.running is False
    close_db.assert_awaited_once()


@pytest.mark.asyncio
async def test_lifespan_without_scheduler(patched_startup, monkeypatch):
    from main import create_application

    monkeypatch.setattr(settings, "MIGRATION_SCHEDULER_ENABLED", False)
    app = create_application()

    async with app.router.lifespan_context(app):
        assert app.state.scheduler is None
        assert app.state.migration_scheduler.is_running is False

    _, close_db = patched_startup
    close_db.assert_awaited_once()
