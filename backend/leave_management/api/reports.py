from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response

from leave_management.api.deps import RepositoriesDep
from leave_management.schemas.report import ReportResponse
from leave_management.services import report as report_service

reports_router = APIRouter(prefix="/reports", tags=["reports"])


@reports_router.get("", response_model=ReportResponse)
async def get_report(repos: RepositoriesDep) -> ReportResponse:
    """Dashboard metrics, balances, manager activity and the audit trail."""
    return await report_service.get_report(repos)


@reports_router.get("/export/{report_name}")
async def export_report(report_name: str, repos: RepositoriesDep) -> Response:
    """Download one report section as CSV."""
    content = await report_service.export_report_csv(repos, report_name)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{report_name}.csv"'},
    )
