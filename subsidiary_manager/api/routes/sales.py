"""Sales endpoints scoped to one subsidiary."""

from fastapi import APIRouter, Depends, status

from subsidiary_manager.api.dependencies import (
    get_current_user,
    get_record_sale_use_case,
    get_sales_store,
    require_subsidiary_access,
)
from subsidiary_manager.application.dto.requests import RecordSaleRequest
from subsidiary_manager.application.dto.responses import ErrorResponse, SaleResponse
from subsidiary_manager.application.use_cases import RecordSaleUseCase
from subsidiary_manager.core.entities import Subsidiary, User
from subsidiary_manager.core.interfaces import ISalesStore

router = APIRouter(prefix="/api/subsidiaries/{subsidiary_id}/sales", tags=["sales"])


@router.get("", response_model=list[SaleResponse])
async def list_sales(
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    store: ISalesStore = Depends(get_sales_store),
) -> list[SaleResponse]:
    """List the subsidiary's sales, oldest first."""
    sales = await store.list_sales_by_subsidiary(subsidiary.id)  # type: ignore[arg-type]
    return [SaleResponse.from_entity(sale) for sale in sales]


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_sale(
    body: RecordSaleRequest,
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    user: User = Depends(get_current_user),
    use_case: RecordSaleUseCase = Depends(get_record_sale_use_case),
) -> SaleResponse:
    """Sell units of an item; stock is decremented in the same transaction."""
    result = await use_case.execute(subsidiary.id, user, body)  # type: ignore[arg-type]
    return use_case.to_response(result)
