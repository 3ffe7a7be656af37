"""Task router - admin assignment and vendor task endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_admin, require_vendor
from ...database import get_db
from ...models import User
from .schemas import AssignmentRequest, TaskResponse, TaskStatsResponse, TaskStatusUpdate
from .service import TaskService

router = APIRouter(tags=["Tasks"])


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Dependency injection for TaskService"""
    return TaskService(db)


@router.post("/bookings/{booking_id}/assignments", response_model=TaskResponse, status_code=201)
async def assign_vendor(
    booking_id: str,
    data: AssignmentRequest,
    admin: User = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
):
    """Assign a vendor to one category of a booking"""
    return service.assign(booking_id, data.vendorId, data.category, admin)


@router.get("/bookings/{booking_id}/tasks", response_model=list[TaskResponse])
async def booking_tasks(
    booking_id: str,
    _: User = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
):
    return service.list_for_booking(booking_id)


@router.get("/tasks/mine", response_model=list[TaskResponse])
async def my_tasks(
    status: Optional[str] = Query(None),
    vendor: User = Depends(require_vendor),
    service: TaskService = Depends(get_task_service),
):
    return service.list_for_vendor(vendor, status)


@router.get("/tasks/mine/stats", response_model=TaskStatsResponse)
async def my_task_stats(
    vendor: User = Depends(require_vendor),
    service: TaskService = Depends(get_task_service),
):
    return service.stats(vendor)


@router.patch("/tasks/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    data: TaskStatusUpdate,
    vendor: User = Depends(require_vendor),
    service: TaskService = Depends(get_task_service),
):
    """Vendor moves one of their own tasks"""
    return service.update_status(task_id, data.status, vendor)
