"""
Statistics endpoints for API v1.

``/statistics/overview`` feeds the dashboard cards and
``/statistics/academic`` the reports page.  Figures are recomputed on
every request.
"""

from fastapi import APIRouter, Depends

from campus_admin_api.app.api.dependencies import get_statistics_service
from campus_admin_api.app.schemas.stats import AcademicReport, DashboardOverview
from campus_admin_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/overview", response_model=DashboardOverview)
async def get_overview(service: StatisticsService = Depends(get_statistics_service)) -> DashboardOverview:
    """Получить сводные показатели для главной панели."""
    return await service.overview()


@router.get("/academic", response_model=AcademicReport)
async def get_academic_report(service: StatisticsService = Depends(get_statistics_service)) -> AcademicReport:
    """Return program, year and GPA distributions and per-course utilization."""
    return await service.academic_report()
