"""Response DTOs for API endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from subsidiary_manager.core.entities import (
    ActivityLog,
    InventoryItem,
    Sale,
    StockTotals,
    Subsidiary,
    User,
)


class UserResponse(BaseModel):
    """User response DTO. Never carries the password hash."""

    id: int
    username: str
    role: str
    subsidiary_id: int | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,  # type: ignore[arg-type]
            username=user.username,
            role=user.role.value,
            subsidiary_id=user.subsidiary_id,
            created_at=user.created_at,
        )


class SubsidiaryResponse(BaseModel):
    """Subsidiary response DTO."""

    id: int
    name: str
    tax_id: str
    email: str
    phone_number: str
    logo: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    status: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, subsidiary: Subsidiary) -> "SubsidiaryResponse":
        return cls.model_validate(subsidiary.model_dump())


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: int
    subsidiary_id: int
    name: str
    quantity: int
    cost_price: Decimal
    sale_price: Decimal
    stock_value: Decimal
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(**item.model_dump(), stock_value=item.stock_value)


class SaleResponse(BaseModel):
    """Sale response DTO; total is quantity times unit price."""

    id: int
    subsidiary_id: int
    item_id: int
    user_id: int
    quantity: int
    sale_price: Decimal
    total: Decimal
    timestamp: datetime

    @classmethod
    def from_entity(cls, sale: Sale) -> "SaleResponse":
        return cls(**sale.model_dump(), total=sale.total)


class ActivityLogResponse(BaseModel):
    """Activity log entry."""

    id: int
    subsidiary_id: int | None = None
    user_id: int | None = None
    action: str
    details: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, log: ActivityLog) -> "ActivityLogResponse":
        return cls.model_validate(log.model_dump())


class StockTotalsResponse(BaseModel):
    """Stock aggregated across every subsidiary."""

    items: int
    quantity: int
    value: Decimal

    @classmethod
    def from_entity(cls, totals: StockTotals) -> "StockTotalsResponse":
        return cls.model_validate(totals.model_dump())


class ReportResponse(BaseModel):
    """Tabular report over a time window."""

    report: str
    start: datetime
    end: datetime
    count: int
    rows: list[dict]


class DatabaseConfigResponse(BaseModel):
    """Active engine and non-secret connection details."""

    engine: str
    connection: dict = Field(default_factory=dict)
    pending_engine: str | None = Field(
        default=None, description="Engine saved for the next restart, if different"
    )
    restart_required: bool = False


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float


class DatabaseHealthResponse(BaseModel):
    """Database connectivity check."""

    status: str
    engine: str
    latency_ms: float | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. SUBSIDIARY_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
