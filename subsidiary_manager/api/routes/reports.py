"""Downloadable reports over a time window (MHC admin only)."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from subsidiary_manager.api.dependencies import get_report_use_case, require_mhc_admin
from subsidiary_manager.application.dto.responses import ErrorResponse, ReportResponse
from subsidiary_manager.application.use_cases import (
    GenerateReportUseCase,
    render_csv,
    resolve_time_window,
)
from subsidiary_manager.core.entities import User

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get(
    "/{kind}",
    response_model=ReportResponse,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse},
    },
)
async def get_report(
    kind: Literal["sales", "inventory", "activity"],
    output: Literal["json", "csv"] = Query(default="json", alias="format"),
    time_range: str | None = Query(default=None, alias="timeRange"),
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    subsidiary_id: int | None = Query(default=None, alias="subsidiaryId"),
    _: User = Depends(require_mhc_admin),
    use_case: GenerateReportUseCase = Depends(get_report_use_case),
) -> ReportResponse | Response:
    """
    Sales, inventory or activity report.

    The window is timeRange=week|month|year, or an inclusive
    startDate/endDate pair (YYYY-MM-DD).
    """
    start, end = resolve_time_window(time_range, start_date, end_date)
    result = await use_case.execute(kind, start, end, subsidiary_id)

    if output == "csv":
        filename = f"{kind}-report-{start.date()}-{end.date()}.csv"
        return Response(
            content=render_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return ReportResponse(
        report=result.kind,
        start=result.start,
        end=result.end,
        count=len(result.rows),
        rows=result.rows,
    )
