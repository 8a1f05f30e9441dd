"""
Database schema migrator with versioned migrations.

Supports:
- Versioned SQL migrations per dialect (postgresql/v001_*.sql, mysql/..., sqlite/...)
- Migration tracking in the schema_migrations table
- Checksum verification of already-applied migrations
"""

import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import utcnow
from subsidiary_manager.core.exceptions import DatabaseError
from subsidiary_manager.infrastructure.storage.database.base import Database

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

# Portable across all three engines
SCHEMA_MIGRATIONS_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version VARCHAR(32) NOT NULL PRIMARY KEY,
    name VARCHAR(255) NOT NULL,
    checksum VARCHAR(64) NOT NULL,
    execution_time_ms INTEGER NOT NULL,
    applied_at VARCHAR(32) NOT NULL
)
"""


@dataclass
class MigrationInfo:
    """Information about a migration file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        """Parse migration info from filename."""
        # Expected format: v001_name.sql
        match = re.match(r"v(\d+)_(.+)\.sql", path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        content = path.read_text(encoding="utf-8")
        checksum = hashlib.sha256(content.encode()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)

    def statements(self) -> list[str]:
        """Split the file into individual statements, dropping comments."""
        lines = [
            line
            for line in self.path.read_text(encoding="utf-8").splitlines()
            if not line.strip().startswith("--")
        ]
        return [s.strip() for s in "\n".join(lines).split(";") if s.strip()]


@dataclass
class MigrationResult:
    """Result of a migration operation."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(engine: str) -> list[MigrationInfo]:
    """Discover the migration files for one dialect, in order."""
    migrations = []
    for path in sorted((MIGRATIONS_DIR / engine).glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def get_applied_migrations(db: Database) -> dict[str, str]:
    """Get dictionary of applied migration versions to checksums."""
    await db.execute(SCHEMA_MIGRATIONS_DDL)
    rows = await db.fetch_all(
        "SELECT version, checksum FROM schema_migrations ORDER BY version"
    )
    return {row["version"]: row["checksum"] for row in rows}


async def apply_migration(db: Database, migration: MigrationInfo) -> MigrationResult:
    """Apply a single migration inside one transaction."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start_time = time.time()

    try:
        async with db.transaction() as conn:
            for statement in migration.statements():
                await conn.execute(statement)

            await conn.execute(
                "INSERT INTO schema_migrations "
                "(version, name, checksum, execution_time_ms, applied_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    migration.version,
                    migration.name,
                    migration.checksum,
                    int((time.time() - start_time) * 1000),
                    utcnow().isoformat(),
                ),
            )
    except DatabaseError as e:
        execution_time = int((time.time() - start_time) * 1000)
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=e.message,
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=execution_time,
            error=e.message,
        )

    execution_time = int((time.time() - start_time) * 1000)
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=execution_time,
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=execution_time,
    )


async def run_migrations(db: Database) -> list[MigrationResult]:
    """
    Apply every pending migration for the handle's engine.

    Raises DatabaseError on the first failure so startup aborts.
    """
    logger.info("initializing_schema", engine=db.engine)

    applied = await get_applied_migrations(db)
    results: list[MigrationResult] = []

    for migration in discover_migrations(db.engine):
        if migration.version in applied:
            if applied[migration.version] != migration.checksum:
                logger.warning("migration_checksum_changed", version=migration.version)
            continue

        result = await apply_migration(db, migration)
        results.append(result)
        if not result.success:
            raise DatabaseError(f"migration v{migration.version}", result.error or "unknown error")

    logger.info("schema_ready", engine=db.engine, applied=len(results))
    return results


async def get_migration_status(db: Database) -> dict:
    """Applied and pending migration versions."""
    applied = await get_applied_migrations(db)
    discovered = discover_migrations(db.engine)
    return {
        "engine": db.engine,
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }
