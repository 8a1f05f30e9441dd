"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from subsidiary_manager.application.dto.requests import (
    CreateInventoryItemRequest,
    CreateSubsidiaryRequest,
    CreateUserRequest,
    LoginRequest,
    RecordSaleRequest,
    UpdateDatabaseConfigRequest,
    UpdateInventoryItemRequest,
    UpdateSubsidiaryRequest,
    UpdateUserRequest,
)
from subsidiary_manager.application.dto.responses import (
    ActivityLogResponse,
    DatabaseConfigResponse,
    DatabaseHealthResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    ReportResponse,
    SaleResponse,
    StockTotalsResponse,
    SubsidiaryResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "CreateInventoryItemRequest",
    "CreateSubsidiaryRequest",
    "CreateUserRequest",
    "LoginRequest",
    "RecordSaleRequest",
    "UpdateDatabaseConfigRequest",
    "UpdateInventoryItemRequest",
    "UpdateSubsidiaryRequest",
    "UpdateUserRequest",
    # Responses
    "ActivityLogResponse",
    "DatabaseConfigResponse",
    "DatabaseHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryItemResponse",
    "ReportResponse",
    "SaleResponse",
    "StockTotalsResponse",
    "SubsidiaryResponse",
    "UserResponse",
]
