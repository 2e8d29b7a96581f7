"""Dashboard router."""

from fastapi import APIRouter

from postsmith.dependencies import CurrentUserRequired, DashboardServiceDep, RateLimitGuard
from postsmith.schemas.dashboard import DashboardResponse

router = APIRouter(dependencies=[RateLimitGuard])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(user: CurrentUserRequired, service: DashboardServiceDep) -> DashboardResponse:
    return await service.summarize(user.uid)
