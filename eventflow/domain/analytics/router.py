from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import User
from .schemas import DashboardResponse, SummaryResponse
from .service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


@router.get("/summary", response_model=SummaryResponse)
async def summary(
    _: User = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Headline counts and total revenue"""
    return service.summary()


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    _: User = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.dashboard()
