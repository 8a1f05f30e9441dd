"""Inventory endpoints scoped to one subsidiary."""

from fastapi import APIRouter, Depends, Response, status

from subsidiary_manager.api.dependencies import (
    get_activity_log_store,
    get_current_user,
    get_inventory_store,
    require_subsidiary_access,
)
from subsidiary_manager.application.dto.requests import (
    CreateInventoryItemRequest,
    UpdateInventoryItemRequest,
)
from subsidiary_manager.application.dto.responses import ErrorResponse, InventoryItemResponse
from subsidiary_manager.application.use_cases import log_activity
from subsidiary_manager.core.entities import InventoryItem, Subsidiary, User
from subsidiary_manager.core.exceptions import InventoryItemNotFoundError
from subsidiary_manager.core.interfaces import IActivityLogStore, IInventoryStore

router = APIRouter(prefix="/api/subsidiaries/{subsidiary_id}/inventory", tags=["inventory"])


async def _get_owned_item(store: IInventoryStore, subsidiary_id: int, item_id: int) -> InventoryItem:
    item = await store.get_inventory(item_id)
    if item is None or item.subsidiary_id != subsidiary_id:
        raise InventoryItemNotFoundError(item_id)
    return item


@router.get("", response_model=list[InventoryItemResponse])
async def list_inventory(
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    store: IInventoryStore = Depends(get_inventory_store),
) -> list[InventoryItemResponse]:
    """List the subsidiary's items."""
    items = await store.list_inventory_by_subsidiary(subsidiary.id)  # type: ignore[arg-type]
    return [InventoryItemResponse.from_entity(item) for item in items]


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_inventory_item(
    body: CreateInventoryItemRequest,
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    user: User = Depends(get_current_user),
    store: IInventoryStore = Depends(get_inventory_store),
    activity: IActivityLogStore = Depends(get_activity_log_store),
) -> InventoryItemResponse:
    """Add an item to the subsidiary's inventory."""
    item = await store.create_inventory(
        InventoryItem(subsidiary_id=subsidiary.id, **body.model_dump())  # type: ignore[arg-type]
    )
    await log_activity(
        activity,
        "inventory_created",
        f"Added {item.name} (qty {item.quantity})",
        user=user,
        subsidiary_id=subsidiary.id,
    )
    return InventoryItemResponse.from_entity(item)


@router.patch(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_inventory_item(
    item_id: int,
    body: UpdateInventoryItemRequest,
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    user: User = Depends(get_current_user),
    store: IInventoryStore = Depends(get_inventory_store),
    activity: IActivityLogStore = Depends(get_activity_log_store),
) -> InventoryItemResponse:
    """Partial update of an item."""
    await _get_owned_item(store, subsidiary.id, item_id)  # type: ignore[arg-type]
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    item = await store.update_inventory(item_id, changes)
    await log_activity(
        activity,
        "inventory_updated",
        f"Updated {item.name}: {', '.join(sorted(changes)) or 'no changes'}",
        user=user,
        subsidiary_id=subsidiary.id,
    )
    return InventoryItemResponse.from_entity(item)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_inventory_item(
    item_id: int,
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    user: User = Depends(get_current_user),
    store: IInventoryStore = Depends(get_inventory_store),
    activity: IActivityLogStore = Depends(get_activity_log_store),
) -> Response:
    """Hard-delete an item. Past sales keep their item_id."""
    item = await _get_owned_item(store, subsidiary.id, item_id)  # type: ignore[arg-type]
    await store.delete_inventory(item_id)
    await log_activity(
        activity,
        "inventory_deleted",
        f"Deleted {item.name}",
        user=user,
        subsidiary_id=subsidiary.id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
