from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import User
from .schemas import ActivityResponse
from .service import ActivityService

router = APIRouter(prefix="/activity", tags=["Activity"])


def get_activity_service(db: Session = Depends(get_db)) -> ActivityService:
    return ActivityService(db)


@router.get("", response_model=list[ActivityResponse])
async def activity_feed(
    limit: Optional[int] = Query(None, ge=1),
    _: User = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service),
):
    """Recent admin activity, newest first"""
    return service.feed(limit)
