"""
Reports Use Case - sales, inventory and activity over a time window.

Windows are either a named range relative to now (week, month, year) or an
explicit inclusive date range. Output is JSON rows or CSV with one column
per row key.
"""

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Literal

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import utcnow
from subsidiary_manager.core.exceptions import ValidationError
from subsidiary_manager.core.interfaces import IActivityLogStore, IInventoryStore, ISalesStore

logger = get_logger(__name__)

ReportKind = Literal["sales", "inventory", "activity"]
TimeRange = Literal["week", "month", "year"]

RANGE_DAYS: dict[str, int] = {
    "week": 7,
    "month": 30,
    "year": 365,
}

REPORT_COLUMNS: dict[str, list[str]] = {
    "sales": [
        "id",
        "timestamp",
        "subsidiary_id",
        "item_id",
        "user_id",
        "quantity",
        "sale_price",
        "total",
    ],
    "inventory": [
        "id",
        "subsidiary_id",
        "name",
        "quantity",
        "cost_price",
        "sale_price",
        "stock_value",
        "updated_at",
    ],
    "activity": ["id", "timestamp", "subsidiary_id", "user_id", "action", "details"],
}


def _parse_date(field: str, value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(field, "Expected a date in YYYY-MM-DD format", value) from None


def resolve_time_window(
    time_range: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Turn report query parameters into a [start, end] datetime pair.

    An explicit start/end pair wins over time_range and covers both days
    in full. With neither, the window is the last month.
    """
    if start_date or end_date:
        if not (start_date and end_date):
            raise ValidationError("startDate", "startDate and endDate must be given together")
        start = datetime.combine(_parse_date("startDate", start_date), time.min)
        end = datetime.combine(_parse_date("endDate", end_date), time.max)
        if start > end:
            raise ValidationError("startDate", "startDate must not be after endDate", start_date)
        return start, end

    time_range = time_range or "month"
    if time_range not in RANGE_DAYS:
        raise ValidationError("timeRange", "Expected week, month or year", time_range)

    end = now or utcnow()
    return end - timedelta(days=RANGE_DAYS[time_range]), end


@dataclass
class ReportResult:
    """Rows of one report over a window."""

    kind: str
    start: datetime
    end: datetime
    columns: list[str]
    rows: list[dict[str, Any]]


def render_csv(result: ReportResult) -> str:
    """CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=result.columns, lineterminator="\n")
    writer.writeheader()
    writer.writerows(result.rows)
    return buffer.getvalue()


class GenerateReportUseCase:
    """Build sales, inventory or activity reports."""

    def __init__(
        self,
        sales_store: ISalesStore,
        inventory_store: IInventoryStore,
        activity_log_store: IActivityLogStore,
    ):
        self._sales_store = sales_store
        self._inventory_store = inventory_store
        self._activity_log_store = activity_log_store

    async def execute(
        self,
        kind: ReportKind,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> ReportResult:
        if kind == "sales":
            rows = await self._sales_rows(start, end, subsidiary_id)
        elif kind == "inventory":
            rows = await self._inventory_rows(start, end, subsidiary_id)
        elif kind == "activity":
            rows = await self._activity_rows(start, end, subsidiary_id)
        else:
            raise ValidationError("report", "Unknown report", kind)

        logger.info(
            "report_generated",
            report=kind,
            start=start.isoformat(),
            end=end.isoformat(),
            rows=len(rows),
        )
        return ReportResult(
            kind=kind, start=start, end=end, columns=REPORT_COLUMNS[kind], rows=rows
        )

    async def _sales_rows(self, start, end, subsidiary_id) -> list[dict[str, Any]]:
        sales = await self._sales_store.list_sales_between(start, end, subsidiary_id)
        return [
            {
                "id": s.id,
                "timestamp": s.timestamp.isoformat(),
                "subsidiary_id": s.subsidiary_id,
                "item_id": s.item_id,
                "user_id": s.user_id,
                "quantity": s.quantity,
                "sale_price": str(s.sale_price),
                "total": str(s.total),
            }
            for s in sales
        ]

    async def _inventory_rows(self, start, end, subsidiary_id) -> list[dict[str, Any]]:
        items = await self._inventory_store.list_inventory_updated_between(
            start, end, subsidiary_id
        )
        return [
            {
                "id": i.id,
                "subsidiary_id": i.subsidiary_id,
                "name": i.name,
                "quantity": i.quantity,
                "cost_price": str(i.cost_price),
                "sale_price": str(i.sale_price),
                "stock_value": str(i.stock_value),
                "updated_at": i.updated_at.isoformat(),
            }
            for i in items
        ]

    async def _activity_rows(self, start, end, subsidiary_id) -> list[dict[str, Any]]:
        logs = await self._activity_log_store.list_activity_logs_between(
            start, end, subsidiary_id
        )
        return [
            {
                "id": log.id,
                "timestamp": log.timestamp.isoformat(),
                "subsidiary_id": log.subsidiary_id,
                "user_id": log.user_id,
                "action": log.action,
                "details": log.details,
            }
            for log in logs
        ]
