"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with documented fallbacks.
The database engine is resolved once per process; changing it requires a
restart.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DbEngine = Literal["postgresql", "mysql", "sqlite"]

DEFAULT_PORTS: dict[str, int] = {
    "postgresql": 5432,
    "mysql": 3306,
    "sqlite": 0,
}


class DatabaseSettings(BaseSettings):
    """Database engine and connection parameters (the process-wide DbConfig)."""

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        populate_by_name=True,
        extra="ignore",
    )

    engine: DbEngine = "mysql"
    host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("DB_HOST", "PGHOST"),
    )
    port: int | None = Field(
        default=None,
        validation_alias=AliasChoices("DB_PORT", "PGPORT"),
    )
    database: str = Field(
        default="subsidiary_management",
        validation_alias=AliasChoices("DB_NAME", "PGDATABASE"),
    )
    username: str = Field(
        default="root",
        validation_alias=AliasChoices("DB_USER", "PGUSER"),
    )
    password: str = Field(
        default="",
        validation_alias=AliasChoices("DB_PASSWORD", "PGPASSWORD"),
    )
    url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "DB_URL"),
    )

    # SQLite (local development and tests)
    sqlite_path: Path = Path("data/subsidiary_management.db")

    # Pool and timeouts
    pool_min_size: int = 1
    pool_max_size: int = 10
    connect_timeout: float = 10.0  # seconds
    query_timeout: float = 30.0  # seconds

    @model_validator(mode="after")
    def default_port_for_engine(self) -> "DatabaseSettings":
        if self.port is None:
            self.port = DEFAULT_PORTS[self.engine]
        return self

    def describe(self) -> dict[str, object]:
        """Connection info safe to log or return over the API."""
        if self.engine == "sqlite":
            return {"engine": self.engine, "path": str(self.sqlite_path)}
        return {
            "engine": self.engine,
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "username": self.username,
        }


class AuthSettings(BaseSettings):
    """Authentication sessions and the default admin account."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    session_backend: Literal["auto", "database", "memory"] = "auto"
    session_ttl_seconds: int = 86400
    session_cookie_name: str = "sid"
    cookie_secure: bool = False
    memory_check_period_seconds: int = 86400

    admin_username: str = "admin"
    admin_password: str | None = None
    bootstrap_delay_seconds: float = 1.0


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:5173"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Subsidiary Manager"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    env_file_path: Path = Path(".env")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    api: APISettings = Field(default_factory=APISettings)

    @property
    def session_backend(self) -> Literal["database", "memory"]:
        """Resolve `auto`: database-backed sessions only on PostgreSQL."""
        backend = self.auth.session_backend
        if backend == "auto":
            return "database" if self.database.engine == "postgresql" else "memory"
        return backend


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None


def write_env_value(path: Path, key: str, value: str) -> None:
    """Set KEY=value in a dotenv file, replacing an existing assignment."""
    lines: list[str] = []
    if path.exists():
        lines = path.read_text(encoding="utf-8").splitlines()

    assignment = f"{key}={value}"
    for i, line in enumerate(lines):
        if line.split("=", 1)[0].strip() == key:
            lines[i] = assignment
            break
    else:
        lines.append(assignment)

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def read_env_value(path: Path, key: str) -> str | None:
    """Value assigned to KEY in a dotenv file, if any."""
    if not path.exists():
        return None
    for line in path.read_text(encoding="utf-8").splitlines():
        name, sep, value = line.partition("=")
        if sep and name.strip() == key:
            return value.strip().strip("\"'")
    return None
