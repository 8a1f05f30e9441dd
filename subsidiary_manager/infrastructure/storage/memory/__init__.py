"""In-process storage implementations."""

from subsidiary_manager.infrastructure.storage.memory.session_store import MemorySessionStore

__all__ = ["MemorySessionStore"]
