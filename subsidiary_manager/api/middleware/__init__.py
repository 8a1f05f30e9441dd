"""API middleware."""

from subsidiary_manager.api.middleware.error_handler import ErrorHandlerMiddleware
from subsidiary_manager.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
