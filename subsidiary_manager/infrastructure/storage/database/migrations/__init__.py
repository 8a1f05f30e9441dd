"""Versioned per-dialect schema migrations."""

from subsidiary_manager.infrastructure.storage.database.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    discover_migrations,
    get_migration_status,
    run_migrations,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "discover_migrations",
    "get_migration_status",
    "run_migrations",
]
