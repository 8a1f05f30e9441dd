"""Infrastructure layer implementations."""

from subsidiary_manager.infrastructure import storage

__all__ = ["storage"]
