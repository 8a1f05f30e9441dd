"""Application use cases."""

from subsidiary_manager.application.use_cases.activity import log_activity
from subsidiary_manager.application.use_cases.database_config import (
    DatabaseConfigResult,
    DatabaseConfigUseCase,
)
from subsidiary_manager.application.use_cases.login import LoginResult, LoginUseCase
from subsidiary_manager.application.use_cases.manage_users import ManageUsersUseCase
from subsidiary_manager.application.use_cases.record_sale import (
    RecordSaleResult,
    RecordSaleUseCase,
)
from subsidiary_manager.application.use_cases.reports import (
    GenerateReportUseCase,
    ReportResult,
    render_csv,
    resolve_time_window,
)

__all__ = [
    "DatabaseConfigResult",
    "DatabaseConfigUseCase",
    "GenerateReportUseCase",
    "LoginResult",
    "LoginUseCase",
    "ManageUsersUseCase",
    "RecordSaleResult",
    "RecordSaleUseCase",
    "ReportResult",
    "log_activity",
    "render_csv",
    "resolve_time_window",
]
