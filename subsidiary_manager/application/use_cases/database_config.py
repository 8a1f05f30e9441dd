"""Database engine selection, applied on the next restart."""

from dataclasses import dataclass

from subsidiary_manager.config import Settings, get_logger, read_env_value, write_env_value

logger = get_logger(__name__)


@dataclass
class DatabaseConfigResult:
    """Running engine versus the engine saved for the next start."""

    engine: str
    connection: dict
    pending_engine: str | None = None

    @property
    def restart_required(self) -> bool:
        return self.pending_engine is not None


class DatabaseConfigUseCase:
    """
    Read and change the configured database engine.

    The engine is fixed for the process lifetime, so a change is only
    written to the env file and reported as needing a restart.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def current(self) -> DatabaseConfigResult:
        db = self._settings.database
        saved = read_env_value(self._settings.env_file_path, "DB_ENGINE")
        return DatabaseConfigResult(
            engine=db.engine,
            connection=db.describe(),
            pending_engine=saved if saved and saved != db.engine else None,
        )

    def select_engine(self, engine: str) -> DatabaseConfigResult:
        write_env_value(self._settings.env_file_path, "DB_ENGINE", engine)
        logger.warning(
            "database_engine_changed",
            current=self._settings.database.engine,
            pending=engine,
            env_file=str(self._settings.env_file_path),
        )
        return self.current()
