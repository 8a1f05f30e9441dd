"""Tests for DatabaseConfigUseCase."""

import pytest

from subsidiary_manager.application.use_cases.database_config import DatabaseConfigUseCase
from subsidiary_manager.config import DatabaseSettings, Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database=DatabaseSettings(engine="sqlite", sqlite_path=tmp_path / "app.db"),
        env_file_path=tmp_path / ".env",
    )


def test_current_without_env_file(settings):
    result = DatabaseConfigUseCase(settings).current()

    assert result.engine == "sqlite"
    assert result.pending_engine is None
    assert result.restart_required is False
    assert result.connection["engine"] == "sqlite"


def test_select_engine_requires_restart(settings):
    settings.env_file_path.write_text("API_PORT=8080\nDB_ENGINE=sqlite\n", encoding="utf-8")
    use_case = DatabaseConfigUseCase(settings)

    result = use_case.select_engine("postgresql")

    assert result.engine == "sqlite"
    assert result.pending_engine == "postgresql"
    assert result.restart_required is True
    assert settings.env_file_path.read_text(encoding="utf-8") == (
        "API_PORT=8080\nDB_ENGINE=postgresql\n"
    )


def test_pending_change_survives_new_instance(settings):
    DatabaseConfigUseCase(settings).select_engine("mysql")

    assert DatabaseConfigUseCase(settings).current().pending_engine == "mysql"


def test_selecting_running_engine_clears_pending(settings):
    use_case = DatabaseConfigUseCase(settings)
    use_case.select_engine("mysql")

    result = use_case.select_engine("sqlite")

    assert result.pending_engine is None
