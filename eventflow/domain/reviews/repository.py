"""Review repository - Database operations for reviews"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, Review, VendorTask


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def stage(db: Session, **review_data) -> Review:
        review = Review(**review_data)
        db.add(review)
        return review

    @staticmethod
    def get_for_booking(db: Session, booking_id: str, client_id: str) -> Optional[Review]:
        return (
            db.query(Review)
            .filter(Review.booking_id == booking_id, Review.client_id == client_id)
            .first()
        )

    @staticmethod
    def list_for_package(db: Session, package_id: str) -> list[Review]:
        return (
            db.query(Review)
            .filter(Review.package_id == package_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def package_stats(db: Session, package_id: str) -> tuple[float, int]:
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.package_id == package_id)
            .one()
        )
        return float(average or 0), count

    @staticmethod
    def vendor_package_ids(db: Session, vendor_id: str) -> list[str]:
        """Packages of every booking the vendor holds a task on"""
        rows = (
            db.query(Booking.package_id)
            .join(VendorTask, VendorTask.booking_id == Booking.id)
            .filter(VendorTask.vendor_id == vendor_id)
            .distinct()
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def stats_for_packages(db: Session, package_ids: list[str]) -> tuple[float, int]:
        if not package_ids:
            return 0.0, 0
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.package_id.in_(package_ids))
            .one()
        )
        return float(average or 0), count

    @staticmethod
    def completed_task_count(db: Session, vendor_id: str) -> int:
        return (
            db.query(VendorTask)
            .filter(VendorTask.vendor_id == vendor_id, VendorTask.status == "completed")
            .count()
        )
