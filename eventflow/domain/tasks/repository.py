"""Task repository - Database operations for vendor tasks"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import VendorTask


class TaskRepository:
    """Repository for vendor task database operations"""

    @staticmethod
    def stage(db: Session, **task_data) -> VendorTask:
        """Add a task to the current unit of work without committing"""
        task = VendorTask(**task_data)
        db.add(task)
        return task

    @staticmethod
    def get_task(db: Session, task_id: str) -> Optional[VendorTask]:
        return db.query(VendorTask).filter(VendorTask.id == task_id).first()

    @staticmethod
    def get_for_category(db: Session, booking_id: str, category: str) -> Optional[VendorTask]:
        return (
            db.query(VendorTask)
            .filter(VendorTask.booking_id == booking_id, VendorTask.category == category)
            .first()
        )

    @staticmethod
    def list_for_booking(db: Session, booking_id: str) -> list[VendorTask]:
        return db.query(VendorTask).filter(VendorTask.booking_id == booking_id).all()

    @staticmethod
    def list_for_vendor(db: Session, vendor_id: str, status: Optional[str] = None) -> list[VendorTask]:
        query = db.query(VendorTask).filter(VendorTask.vendor_id == vendor_id)
        if status:
            query = query.filter(VendorTask.status == status)
        return query.order_by(VendorTask.event_date.asc(), VendorTask.created_at.asc()).all()

    @staticmethod
    def status_counts(db: Session, vendor_id: str) -> dict[str, int]:
        rows = (
            db.query(VendorTask.status, func.count(VendorTask.id))
            .filter(VendorTask.vendor_id == vendor_id)
            .group_by(VendorTask.status)
            .all()
        )
        return {status: count for status, count in rows}
