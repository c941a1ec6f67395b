from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from care_api.container import ServiceContainer
from care_api.database import get_db
from care_api.dependencies import get_container
from care_api.schemas.report import AlertsReport, SummaryReport

router = APIRouter()


@router.get("/resumo", response_model=SummaryReport)
async def summary_report(
    db: AsyncSession = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
):
    return await container.reports.summary(db)


@router.get("/alertas", response_model=AlertsReport)
async def alerts_report(
    db: AsyncSession = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
):
    return await container.reports.alerts(db)
