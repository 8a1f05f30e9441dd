"""Tests for the structlog processors."""

from subsidiary_manager.config import reset_settings
from subsidiary_manager.config.logging import REDACTED, add_app_context, redact_secrets


def test_app_context_names_engine(monkeypatch):
    monkeypatch.setenv("DB_ENGINE", "sqlite")
    reset_settings()

    event = add_app_context(None, "info", {"event": "database_connected"})

    assert event["db_engine"] == "sqlite"
    assert event["app"] == "Subsidiary Manager"


def test_credentials_are_masked():
    event = redact_secrets(
        None,
        "info",
        {
            "event": "connecting",
            "password": "hunter2",
            "dsn": "postgresql://u:p@h/db",
            "host": "db",
        },
    )

    assert event["password"] == REDACTED
    assert event["dsn"] == REDACTED
    assert event["host"] == "db"


def test_empty_values_left_alone():
    event = redact_secrets(None, "info", {"event": "x", "password": ""})
    assert event["password"] == ""


def test_generated_admin_password_still_shown():
    event = redact_secrets(None, "warning", {"initial_password": "abc123"})
    assert event["initial_password"] == "abc123"
