"""
Domain exceptions for the subsidiary management service.

The data-access layer raises these; the API layer maps them to HTTP status
codes in the error middleware.
"""

from typing import Any


class SubsidiaryManagerError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation
class ValidationError(SubsidiaryManagerError):
    """Input validation failed; raised before any database round-trip."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Not found
class NotFoundError(SubsidiaryManagerError):
    """Read, update or delete target does not exist."""

    def __init__(
        self,
        message: str,
        code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)


class SubsidiaryNotFoundError(NotFoundError):
    """Subsidiary not found."""

    def __init__(self, subsidiary_id: int):
        super().__init__(
            "Subsidiary not found",
            code="SUBSIDIARY_NOT_FOUND",
            details={"subsidiary_id": subsidiary_id},
        )


class InventoryItemNotFoundError(NotFoundError):
    """Inventory item not found."""

    def __init__(self, item_id: int):
        super().__init__(
            "Inventory item not found",
            code="INVENTORY_ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: int):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


# Conflicts
class ConflictError(SubsidiaryManagerError):
    """A uniqueness constraint was violated."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)


class DuplicateTaxIdError(ConflictError):
    """Another subsidiary already uses this tax id."""

    def __init__(self, tax_id: str):
        super().__init__(
            f"A subsidiary with tax ID '{tax_id}' already exists",
            code="DUPLICATE_TAX_ID",
            details={"tax_id": tax_id},
        )


class DuplicateUsernameError(ConflictError):
    """Username is already taken."""

    def __init__(self, username: str):
        super().__init__(
            f"Username '{username}' already exists",
            code="DUPLICATE_USERNAME",
            details={"username": username},
        )


class InsufficientStockError(SubsidiaryManagerError):
    """Requested sale quantity exceeds the available stock."""

    def __init__(self, item_id: int, requested: int, available: int | None = None):
        message = f"Insufficient stock for item {item_id}: requested {requested}"
        if available is not None:
            message += f", available {available}"
        super().__init__(
            message,
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


# Auth
class AuthenticationError(SubsidiaryManagerError):
    """No valid session, or bad credentials."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="AUTHENTICATION_REQUIRED")


class PermissionDeniedError(SubsidiaryManagerError):
    """Authenticated user lacks the role or tenant access."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="FORBIDDEN")


# Storage
class StorageError(SubsidiaryManagerError):
    """Base exception for storage operations."""

    pass


class DatabaseConnectionError(StorageError):
    """Connection not established yet, or could not be established."""

    def __init__(self, reason: str = "Database connection not established"):
        super().__init__(reason, code="CONNECTION_ERROR", details={"reason": reason})


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class QueryTimeoutError(StorageError):
    """A statement exceeded the configured query timeout."""

    def __init__(self, timeout: float, operation: str = "query"):
        super().__init__(
            f"Database {operation} timed out after {timeout} seconds",
            code="QUERY_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class ConfigurationError(SubsidiaryManagerError):
    """Configuration error."""

    pass
