"""Request DTOs for API endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from subsidiary_manager.config.settings import DbEngine
from subsidiary_manager.core.entities import UserRole

# --- Auth ---


class LoginRequest(BaseModel):
    """Credentials for a session login."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Plaintext password")


# --- Subsidiaries ---


class CreateSubsidiaryRequest(BaseModel):
    """Request to register a subsidiary."""

    name: str = Field(..., description="Company name")
    tax_id: str = Field(..., description="Tax identifier, unique across subsidiaries")
    email: str = Field(..., description="Contact email")
    phone_number: str = Field(..., description="Contact phone number")
    logo: str | None = Field(default=None, description="Logo path or URL")
    address: str | None = None
    city: str | None = None
    country: str | None = None
    status: bool = Field(default=True, description="Active flag")


class UpdateSubsidiaryRequest(BaseModel):
    """Partial subsidiary update; only fields that are sent change."""

    name: str | None = None
    tax_id: str | None = None
    email: str | None = None
    phone_number: str | None = None
    logo: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    status: bool | None = Field(default=None, description="Set false to deactivate")


# --- Inventory ---


class CreateInventoryItemRequest(BaseModel):
    """Request to add an item to a subsidiary's inventory."""

    name: str = Field(..., description="Item name")
    quantity: int = Field(default=0, description="Units in stock")
    cost_price: Decimal = Field(default=Decimal("0"), description="Unit cost")
    sale_price: Decimal = Field(default=Decimal("0"), description="Unit sale price")


class UpdateInventoryItemRequest(BaseModel):
    """Partial inventory update."""

    name: str | None = None
    quantity: int | None = None
    cost_price: Decimal | None = None
    sale_price: Decimal | None = None


# --- Sales ---


class RecordSaleRequest(BaseModel):
    """Request to sell units of one inventory item."""

    item_id: int = Field(..., description="Inventory item ID")
    quantity: int = Field(..., description="Units sold")
    sale_price: Decimal | None = Field(
        default=None,
        description="Unit price (defaults to the item's current sale price)",
    )


# --- Users ---


class CreateUserRequest(BaseModel):
    """Request to create a user inside a subsidiary."""

    username: str = Field(..., description="Unique username")
    password: str = Field(..., description="Initial password")
    role: UserRole = Field(default=UserRole.STAFF, description="staff or subsidiary_admin")


class UpdateUserRequest(BaseModel):
    """Partial user update."""

    username: str | None = None
    password: str | None = Field(default=None, description="New password")
    role: UserRole | None = None


# --- Configuration ---


class UpdateDatabaseConfigRequest(BaseModel):
    """Select the database engine for the next restart."""

    engine: DbEngine = Field(..., description="postgresql, mysql or sqlite")
