from fastapi import APIRouter, Depends
from studio.modules.auth.utility import staff_or_admin
from studio.modules.dashboard.dependencies import get_dashboard_service
from studio.modules.dashboard.service import DashboardService

dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"], dependencies=[Depends(staff_or_admin)])

@dashboard_router.get("/summary")
async def get_summary(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    return await dashboard_service.get_summary()
