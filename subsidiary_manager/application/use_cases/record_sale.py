"""Record Sale Use Case - sell stock of one inventory item."""

from dataclasses import dataclass

from subsidiary_manager.application.dto.requests import RecordSaleRequest
from subsidiary_manager.application.dto.responses import SaleResponse
from subsidiary_manager.application.use_cases.activity import log_activity
from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import InventoryItem, Sale, User
from subsidiary_manager.core.exceptions import InventoryItemNotFoundError
from subsidiary_manager.core.interfaces import IActivityLogStore, IInventoryStore, ISalesStore

logger = get_logger(__name__)


@dataclass
class RecordSaleResult:
    """Result of recording a sale."""

    sale: Sale
    item: InventoryItem


class RecordSaleUseCase:
    """Record a sale against a subsidiary's inventory."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        sales_store: ISalesStore,
        activity_log_store: IActivityLogStore,
    ):
        self._inventory_store = inventory_store
        self._sales_store = sales_store
        self._activity_log_store = activity_log_store

    async def execute(
        self, subsidiary_id: int, user: User, request: RecordSaleRequest
    ) -> RecordSaleResult:
        """Execute record sale use case."""
        logger.info(
            "record_sale_started",
            subsidiary_id=subsidiary_id,
            item_id=request.item_id,
            quantity=request.quantity,
        )

        # 1. Item must exist and belong to this subsidiary
        item = await self._inventory_store.get_inventory(request.item_id)
        if item is None or item.subsidiary_id != subsidiary_id:
            raise InventoryItemNotFoundError(request.item_id)

        # 2. Price defaults to the item's current sale price
        sale_price = request.sale_price if request.sale_price is not None else item.sale_price

        # 3. Insert and decrement atomically
        sale = await self._sales_store.create_sale(
            Sale(
                subsidiary_id=subsidiary_id,
                item_id=item.id,  # type: ignore[arg-type]
                user_id=user.id,  # type: ignore[arg-type]
                quantity=request.quantity,
                sale_price=sale_price,
            )
        )

        await log_activity(
            self._activity_log_store,
            "sale_created",
            f"Sold {sale.quantity} x {item.name} for {sale.total}",
            user=user,
            subsidiary_id=subsidiary_id,
        )

        logger.info("record_sale_complete", sale_id=sale.id, total=str(sale.total))
        return RecordSaleResult(sale=sale, item=item)

    def to_response(self, result: RecordSaleResult) -> SaleResponse:
        """Convert result to API response."""
        return SaleResponse.from_entity(result.sale)
