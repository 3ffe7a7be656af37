"""Task service - vendor-side task views and status updates"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotTaskOwner, TaskNotFound
from ...models import User, VendorTask
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ..bookings.service import BookingService
from .assignment import AssignmentCoordinator
from .repository import TaskRepository
from .schemas import TaskResponse, TaskStatsResponse

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for vendor tasks"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()

    def assign(self, booking_id: str, vendor_id: str, category: str, admin: User) -> VendorTask:
        booking = BookingService(self.db).get_booking(booking_id)
        return AssignmentCoordinator(self.db).assign(booking, vendor_id, category, admin)

    def list_for_booking(self, booking_id: str) -> list[VendorTask]:
        BookingService(self.db).get_booking(booking_id)
        return self.repo.list_for_booking(self.db, booking_id)

    def list_for_vendor(self, vendor: User, status: Optional[str] = None) -> list[VendorTask]:
        return self.repo.list_for_vendor(self.db, vendor.id, status)

    def stats(self, vendor: User) -> TaskStatsResponse:
        counts = self.repo.status_counts(self.db, vendor.id)
        return TaskStatsResponse(
            total=sum(counts.values()),
            assigned=counts.get("assigned", 0),
            in_progress=counts.get("in-progress", 0),
            completed=counts.get("completed", 0),
        )

    def update_status(self, task_id: str, new_status: str, vendor: User) -> VendorTask:
        """Only the assigned vendor may move a task; no notification is sent"""
        task = self.repo.get_task(self.db, task_id)
        if not task:
            raise TaskNotFound(task_id)
        if task.vendor_id != vendor.id:
            logger.warning(f"⚠️ {vendor.email} tried to update task {task_id} owned by {task.vendor_id}")
            raise NotTaskOwner()

        if task.status == new_status:
            return task

        previous = task.status
        task.status = new_status
        commit_or_fail(self.db, "update task status")
        self.db.refresh(task)

        logger.info(f"✅ Task {task_id} {previous} → {new_status} by {vendor.email}")
        publish_change("tasks", "updated", TaskResponse.model_validate(task).to_document())
        return task
